"""
Single forward scan that turns alphabetical index marks into bookmarks.

Two mark shapes are recognised in content.xml:

  <text:alphabetical-index-mark-start text:id="IMark1"/>Whale<text:alphabetical-index-mark-end text:id="IMark1"/>
  <text:alphabetical-index-mark text:string-value="Whale"/>

The first keeps its marked body text and gains a bookmark in front of it,
the second is replaced by a bare bookmark. Every term is registered in a
TermRegistry as a side effect.
"""
import logging
import re
from enum import Enum
from typing import List, Optional

from .errors import MalformedAnnotationError
from .markup import (
    INDEX_MARK_END, INDEX_MARK_PREFIX, INDEX_MARK_START,
    bookmark, end_of_element, strip_tags,
)
from .registry import TermRegistry

logger = logging.getLogger(__name__)

TAG_NAME_RE = re.compile(r"<([^\s/>]+)")

PAIRED_START_NAME = INDEX_MARK_START[1:]
PAIRED_END_NAME   = INDEX_MARK_END[1:]
SINGLE_NAME       = INDEX_MARK_PREFIX[1:]


class ScanState(Enum):
    IDLE = "idle"
    IN_PAIRED_SPAN = "in-paired-span"
    AT_SINGLE_TAG = "at-single-tag"


class _Scanner:
    __slots__ = ("xml", "registry", "out", "cursor", "marks")

    def __init__(self, xml: str, registry: TermRegistry):
        self.xml, self.registry = xml, registry
        self.out: List[str] = []
        self.cursor = 0
        self.marks = 0

    def step(self, state: ScanState) -> Optional[ScanState]:
        """Run one transition; None means the whole input has been emitted."""
        if state is ScanState.IDLE:
            return self._idle()
        if state is ScanState.IN_PAIRED_SPAN:
            return self._paired()
        return self._single()

    def _idle(self) -> Optional[ScanState]:
        xml, cur = self.xml, self.cursor
        found = xml.find(INDEX_MARK_PREFIX, cur)
        if found < 0:
            self.out.append(xml[cur:])
            self.cursor = len(xml)
            return None
        self.out.append(xml[cur:found])
        self.cursor = found

        m = TAG_NAME_RE.match(xml, found)
        name = m.group(1) if m else ""
        if name == PAIRED_START_NAME:
            return ScanState.IN_PAIRED_SPAN
        if name == SINGLE_NAME:
            return ScanState.AT_SINGLE_TAG
        if name == PAIRED_END_NAME:
            raise MalformedAnnotationError("index mark end without a preceding start", found)
        raise MalformedAnnotationError(f"unrecognised index mark element <{name}>", found)

    def _paired(self) -> ScanState:
        xml, start = self.xml, self.cursor
        body_start = end_of_element(xml, start)
        body_end = xml.find(INDEX_MARK_END, body_start)
        if body_end < 0:
            raise MalformedAnnotationError("index mark start has no matching end", start)
        marked = xml[body_start:body_end]
        nested = marked.find(INDEX_MARK_PREFIX)
        if nested >= 0:
            raise MalformedAnnotationError("index mark inside another index mark", body_start + nested)
        name = self.registry.add(strip_tags(marked))
        self.out.append(bookmark(name))
        self.out.append(marked)
        self.cursor = end_of_element(xml, body_end)
        self.marks += 1
        return ScanState.IDLE

    def _single(self) -> ScanState:
        xml, start = self.xml, self.cursor
        tag_end = end_of_element(xml, start)
        value_start = xml.find('"', start, tag_end) + 1
        value_end = xml.find('"', value_start, tag_end) if value_start else -1
        if value_end < 0:
            raise MalformedAnnotationError("index mark has no quoted term value", start)
        name = self.registry.add(xml[value_start:value_end].strip())
        self.out.append(bookmark(name))
        self.cursor = tag_end
        self.marks += 1
        return ScanState.IDLE


def rewrite_index_marks(xml: str, registry: TermRegistry) -> str:
    """
    Replace every index mark in xml with a text:bookmark, registering terms.
    Raises MalformedAnnotationError (with the offending offset) instead of
    returning a partially rewritten document.
    """
    scanner = _Scanner(xml, registry)
    state: Optional[ScanState] = ScanState.IDLE
    while state is not None:
        state = scanner.step(state)
    if scanner.marks == 0:
        return xml
    logger.debug("rewrote %d index marks into %d terms", scanner.marks, len(registry))
    return "".join(scanner.out)
