import re

from .errors import MalformedAnnotationError

# ---------- tag vocabulary (spelling must match the ODF content.xml) ----------

INDEX_MARK_PREFIX = "<text:alphabetical-index-mark"
INDEX_MARK_START  = "<text:alphabetical-index-mark-start"
INDEX_MARK_END    = "<text:alphabetical-index-mark-end"
SOFT_PAGE_BREAK   = "<text:soft-page-break/>"
PARAGRAPH_START   = "<text:p"
PARAGRAPH_END     = "</text:p>"
SELF_CLOSE        = "/>"
INDEX_SENTINEL    = "[INDEX_HERE]"

TAG_RE = re.compile(r"<[^>]+>")
NON_ANCHOR_CHAR_RE = re.compile(r"[^A-Za-z0-9]")

# ---------- text helpers ----------

def strip_tags(fragment: str) -> str:
    """Drop every tag at any nesting depth and trim, leaving the visible term text."""
    return TAG_RE.sub("", fragment).strip()

def anchor_stem(term: str) -> str:
    return NON_ANCHOR_CHAR_RE.sub("_", term)

def anchor_name(term: str, occurrence: int) -> str:
    """'Moby Dick', 1 -> 'Moby_Dick_1'."""
    return f"{anchor_stem(term)}_{occurrence}"

def end_of_element(xml: str, pos: int) -> int:
    """Offset just past the tag starting at pos, which must end in '/>'."""
    close = xml.find(">", pos)
    if close < 0 or not xml.startswith(SELF_CLOSE, close - 1):
        raise MalformedAnnotationError("element is not closed with '/>'", pos)
    return close + 1

# ---------- output templates ----------

def bookmark(name: str) -> str:
    return f'<text:bookmark text:name="{name}"/>'

def paragraph(style: str, body: str) -> str:
    return f'<text:p text:style-name="{style}">{body}</text:p>'

def link(anchor: str, text: str, link_style: str, visited_style: str) -> str:
    return (
        f'<text:a text:style-name="{link_style}" text:visited-style-name="{visited_style}" '
        f'xlink:href="#{anchor}" xlink:type="simple">{text}</text:a>'
    )
