"""Error taxonomy for the PDF document loader.

Every stage failure surfaces as a subclass of LoaderError so callers can
catch the whole family or a single stage.
"""


class LoaderError(Exception):
    """Base class for all loader failures."""

    pass


class MalformedInputError(LoaderError):
    """Raised when an array-encoded or metadata field cannot be decoded."""

    pass


class StorageFetchError(LoaderError):
    """Raised when the file-storage backend cannot return a referenced file."""

    pass


class ExtractionError(LoaderError):
    """Raised when the extraction backend cannot parse the PDF bytes."""

    pass


class FileSystemError(LoaderError):
    """Raised when a scratch file cannot be created or written."""

    pass
