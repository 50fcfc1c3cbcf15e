from .config import IndexSettings, LinkTargetPolicy, load_settings
from .errors import (
    ArchiveError, ConfigurationError, EmptyRegistryError, IndexerError,
    MalformedAnnotationError, OutputValidationError, PlaceholderNotFoundError,
)
from .marks import rewrite_index_marks
from .pipeline import IndexedDocument, index_document, index_odt_file
from .registry import TermRegistry
from .splice import insert_index, remove_soft_page_breaks
from .synth import letter_headers, synthesize_index

__all__ = [
    "IndexSettings", "LinkTargetPolicy", "load_settings",
    "ArchiveError", "ConfigurationError", "EmptyRegistryError", "IndexerError",
    "MalformedAnnotationError", "OutputValidationError", "PlaceholderNotFoundError",
    "rewrite_index_marks", "IndexedDocument", "index_document", "index_odt_file",
    "TermRegistry", "insert_index", "remove_soft_page_breaks",
    "letter_headers", "synthesize_index",
]
