from typing import Optional


class IndexerError(Exception):
    """Base class for everything that aborts indexing of a document."""


class MalformedAnnotationError(IndexerError):
    def __init__(self, message: str, offset: int):
        super().__init__(f"{message} (at offset {offset})")
        self.offset = offset


class PlaceholderNotFoundError(IndexerError):
    def __init__(self, sentinel: str, offset: Optional[int] = None):
        if offset is None:
            msg = f"placeholder {sentinel!r} not found in document body"
        else:
            msg = f"placeholder {sentinel!r} at offset {offset} is not inside a <text:p> paragraph"
        super().__init__(msg)
        self.sentinel, self.offset = sentinel, offset


class EmptyRegistryError(IndexerError):
    def __init__(self):
        super().__init__("document contains no alphabetical index marks; nothing to index")


class ConfigurationError(IndexerError):
    def __init__(self, key: str, message: str = "required setting is missing"):
        super().__init__(f"{key}: {message}")
        self.key = key


class ArchiveError(IndexerError):
    pass


class OutputValidationError(IndexerError):
    pass
