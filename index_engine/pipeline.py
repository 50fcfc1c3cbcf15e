import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from .config import IndexSettings
from .marks import rewrite_index_marks
from .odt import check_well_formed, default_output_path, read_content_xml, write_content_xml
from .registry import TermRegistry
from .splice import insert_index, remove_soft_page_breaks
from .synth import synthesize_index

logger = logging.getLogger(__name__)


@dataclass
class IndexedDocument:
    xml: str
    registry: TermRegistry
    index_markup: str


def index_document(xml: str, settings: IndexSettings) -> IndexedDocument:
    """
    content.xml text -> marks rewritten as bookmarks, soft page breaks
    optionally dropped, and the generated index in place of the sentinel paragraph.
    """
    registry = TermRegistry()
    body = rewrite_index_marks(xml, registry)
    index_markup = synthesize_index(registry, settings)
    if settings.remove_soft_page_breaks:
        body = remove_soft_page_breaks(body)
    body = insert_index(body, index_markup, settings.sentinel)
    return IndexedDocument(xml=body, registry=registry, index_markup=index_markup)

def index_odt_file(
    source: Union[str, Path],
    settings: IndexSettings,
    output: Optional[Union[str, Path]] = None,
) -> Path:
    source = Path(source)
    target = Path(output) if output is not None else default_output_path(source)

    doc = index_document(read_content_xml(source), settings)
    check_well_formed(doc.xml)
    write_content_xml(source, target, doc.xml)

    logger.info(
        "indexed %s: %d terms, %d bookmarks -> %s",
        source.name, len(doc.registry), doc.registry.anchor_count(), target,
    )
    return target
