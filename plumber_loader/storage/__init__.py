"""File storage backends for storage-reference sources."""

from plumber_loader.storage.file_storage import FileStorage, LocalFileStorage

__all__ = ["FileStorage", "LocalFileStorage"]
