import re

from .errors import PlaceholderNotFoundError
from .markup import INDEX_SENTINEL, PARAGRAPH_END, SOFT_PAGE_BREAK

# "<text:p" followed by attributes or '>', so <text:page-...> and <text:p/> never match
PARAGRAPH_START_RE = re.compile(r"<text:p(?=[\s>])")


def insert_index(xml: str, index_markup: str, sentinel: str = INDEX_SENTINEL) -> str:
    """Replace the whole <text:p> holding the sentinel (tags included) with index_markup."""
    at = xml.find(sentinel)
    if at < 0:
        raise PlaceholderNotFoundError(sentinel)

    start = None
    for m in PARAGRAPH_START_RE.finditer(xml, 0, at):
        start = m.start()
    end = xml.find(PARAGRAPH_END, at + len(sentinel))
    if start is None or end < 0:
        raise PlaceholderNotFoundError(sentinel, at)

    return xml[:start] + index_markup + xml[end + len(PARAGRAPH_END):]

def remove_soft_page_breaks(xml: str) -> str:
    return xml.replace(SOFT_PAGE_BREAK, "")
