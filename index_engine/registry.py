import bisect
from typing import Dict, Iterator, List, Set, Tuple

from .markup import anchor_name


def _key(term: str) -> str:
    return (term or "").casefold()


class TermRegistry:
    """
    Index term -> anchor names, compared case-insensitively.

    The display spelling of a term is the one seen first; later occurrences
    that differ only in case share its anchor list. Iteration is always in
    case-insensitive alphabetical order, never insertion order.
    """

    def __init__(self):
        self._display: Dict[str, str] = {}
        self._anchors: Dict[str, List[str]] = {}
        self._order: List[str] = []
        self._taken: Set[str] = set()

    def add(self, term: str) -> str:
        """Register one occurrence of term and return its fresh anchor name."""
        k = _key(term)
        if k not in self._anchors:
            self._display[k] = term
            self._anchors[k] = []
            bisect.insort(self._order, k)
        anchors = self._anchors[k]
        occurrence = len(anchors)
        name = anchor_name(self._display[k], occurrence)
        # different terms can sanitize to the same stem ("C++" / "C--")
        while name in self._taken:
            occurrence += 1
            name = anchor_name(self._display[k], occurrence)
        anchors.append(name)
        self._taken.add(name)
        return name

    def anchor_count(self) -> int:
        return sum(len(a) for a in self._anchors.values())

    def items(self) -> Iterator[Tuple[str, Tuple[str, ...]]]:
        for k in self._order:
            yield self._display[k], tuple(self._anchors[k])

    def keys(self) -> List[str]:
        return [self._display[k] for k in self._order]

    def __iter__(self):
        return iter(self.keys())

    def __getitem__(self, term: str) -> Tuple[str, ...]:
        return tuple(self._anchors[_key(term)])

    def __contains__(self, term) -> bool:
        return isinstance(term, str) and _key(term) in self._anchors

    def __len__(self) -> int:
        return len(self._order)

    def __repr__(self) -> str:
        return f"TermRegistry({dict(self.items())!r})"
