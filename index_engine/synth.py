import logging
from typing import Iterator, List, NamedTuple, Optional, Tuple, Union

from .config import IndexSettings, LinkTargetPolicy
from .errors import EmptyRegistryError
from .markup import link, paragraph
from .registry import TermRegistry

logger = logging.getLogger(__name__)

BEFORE_A = chr(ord("A") - 1)


class Header(NamedTuple):
    text: str


class Entry(NamedTuple):
    term: str
    anchors: Tuple[str, ...]


def initial(term: str) -> Optional[str]:
    if not term:
        return None
    return term[0].upper()[0]

def letter_range(tracked: str, letter: str) -> str:
    """
    Header text for the section that starts at letter when the last header
    ended at tracked: 'C-E' if letters were skipped, otherwise just 'E'.
    """
    if not "A" <= letter <= "Z":
        return letter
    first = max(chr(ord(tracked) + 1), "A")
    return letter if first >= letter else f"{first}-{letter}"

def iter_index(registry: TermRegistry) -> Iterator[Union[Header, Entry]]:
    """Headers and entries in output order."""
    if not registry:
        raise EmptyRegistryError()

    entries = list(registry.items())
    lead = next((initial(t) for t, _ in entries if initial(t)), "A")
    yield Header(letter_range(BEFORE_A, lead))
    tracked = lead

    for term, anchors in entries:
        letter = initial(term)
        if letter and letter > tracked:
            yield Header(letter_range(tracked, letter))
            tracked = letter
        yield Entry(term, anchors)

def letter_headers(registry: TermRegistry) -> List[str]:
    return [item.text for item in iter_index(registry) if isinstance(item, Header)]

# ---------- rendering ----------

def render_entry(entry: Entry, settings: IndexSettings) -> str:
    styles = (settings.link_style, settings.visited_link_style)
    if len(entry.anchors) == 1:
        return paragraph(settings.entry_paragraph_style, link(entry.anchors[0], entry.term, *styles))

    first = entry.anchors[0]
    numbered = []
    for n, anchor in enumerate(entry.anchors, start=1):
        target = first if settings.link_target_policy is LinkTargetPolicy.FIRST else anchor
        numbered.append(f"[{link(target, str(n), *styles)}]")
    return paragraph(settings.entry_paragraph_style, f"{entry.term}: " + ", ".join(numbered))

def synthesize_index(registry: TermRegistry, settings: IndexSettings) -> str:
    """Render the registry as letter-sectioned text:p paragraphs."""
    parts = []
    for item in iter_index(registry):
        if isinstance(item, Header):
            parts.append(paragraph(settings.heading_paragraph_style, item.text))
        else:
            parts.append(render_entry(item, settings))
    logger.debug("synthesized index with %d terms", len(registry))
    return "".join(parts)
