"""Style names and switches for one indexing run, loaded from a properties file and the environment."""
import logging
import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Mapping, Optional, Union

from dotenv import dotenv_values

from .errors import ConfigurationError
from .markup import INDEX_SENTINEL

logger = logging.getLogger(__name__)

DEFAULT_PROPERTIES_FILE = "EbookIndexer.properties"

ENTRY_STYLE_KEY    = "INDEX_ENTRY_PARAGRAPH_STYLE"
HEADING_STYLE_KEY  = "INDEX_HEADING_PARAGRAPH_STYLE"
LINK_STYLE_KEY     = "INDEX_LINK_STYLE"
VISITED_STYLE_KEY  = "INDEX_VISITED_LINK_STYLE"
SOFT_BREAKS_KEY    = "REMOVE_SOFT_PAGE_BREAKS"
LINK_POLICY_KEY    = "INDEX_LINK_TARGET_POLICY"
SENTINEL_KEY       = "INDEX_SENTINEL"

KNOWN_KEYS = (
    ENTRY_STYLE_KEY, HEADING_STYLE_KEY, LINK_STYLE_KEY, VISITED_STYLE_KEY,
    SOFT_BREAKS_KEY, LINK_POLICY_KEY, SENTINEL_KEY,
)


class LinkTargetPolicy(str, Enum):
    """Where the numbered links of a multi-occurrence entry point."""
    EACH = "each"    # [n] links to the n-th bookmark
    FIRST = "first"  # every [n] links to the first bookmark (legacy output)


@dataclass(frozen=True)
class IndexSettings:
    entry_paragraph_style: str
    heading_paragraph_style: str
    link_style: str = "Internet_20_link"
    visited_link_style: str = "Visited_20_Internet_20_Link"
    remove_soft_page_breaks: bool = True
    link_target_policy: LinkTargetPolicy = LinkTargetPolicy.EACH
    sentinel: str = INDEX_SENTINEL


def parse_bool(value: Optional[str]) -> bool:
    # only "true" (any case) is true, everything else is false
    return (value or "").strip().lower() == "true"


def _required(values: Mapping[str, Optional[str]], key: str) -> str:
    v = (values.get(key) or "").strip()
    if not v:
        raise ConfigurationError(key)
    return v


def settings_from_mapping(values: Mapping[str, Optional[str]]) -> IndexSettings:
    policy_raw = (values.get(LINK_POLICY_KEY) or LinkTargetPolicy.EACH.value).strip().lower()
    try:
        policy = LinkTargetPolicy(policy_raw)
    except ValueError:
        raise ConfigurationError(LINK_POLICY_KEY, f"expected 'each' or 'first', got {policy_raw!r}") from None

    return IndexSettings(
        entry_paragraph_style=_required(values, ENTRY_STYLE_KEY),
        heading_paragraph_style=_required(values, HEADING_STYLE_KEY),
        link_style=(values.get(LINK_STYLE_KEY) or "Internet_20_link").strip(),
        visited_link_style=(values.get(VISITED_STYLE_KEY) or "Visited_20_Internet_20_Link").strip(),
        remove_soft_page_breaks=parse_bool(values.get(SOFT_BREAKS_KEY, "true")),
        link_target_policy=policy,
        sentinel=values.get(SENTINEL_KEY) or INDEX_SENTINEL,
    )


def load_settings(
    path: Optional[Union[str, Path]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> IndexSettings:
    """
    Read KEY=VALUE pairs from the properties file, then let environment
    variables of the same names override them. An explicitly given path must
    exist; the default file is optional when the environment has the styles.
    """
    environ = os.environ if environ is None else environ
    values = {}

    props = Path(path) if path is not None else Path(DEFAULT_PROPERTIES_FILE)
    if props.is_file():
        values.update(dotenv_values(props))
        logger.debug("loaded index settings from %s", props)
    elif path is not None:
        raise ConfigurationError(str(props), "settings file does not exist")

    for key in KNOWN_KEYS:
        if key in environ:
            values[key] = environ[key]

    return settings_from_mapping(values)
