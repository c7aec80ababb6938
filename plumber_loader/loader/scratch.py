"""Scratch files for handing PDF bytes to a path-based extraction backend.

The scratch directory is shared between concurrent invocations, so every
file gets a unique name and is removed by the call that created it.
"""

import logging
import time
import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Protocol

from plumber_loader.errors import FileSystemError

logger = logging.getLogger(__name__)


class TempFileProvider(Protocol):
    """Creates and deletes uniquely named temporary files."""

    def create(self, data: bytes) -> Path: ...

    def delete(self, path: Path) -> None: ...


class ScratchDirectory:
    """Temporary files under a fixed directory, created on first use."""

    def __init__(self, root: Path, suffix: str = ".pdf") -> None:
        self._root = root
        self._suffix = suffix

    @property
    def root(self) -> Path:
        return self._root

    def _unique_name(self) -> str:
        return f"temp-{time.time_ns()}-{uuid.uuid4().hex}{self._suffix}"

    def create(self, data: bytes) -> Path:
        """Write bytes to a new scratch file.

        Args:
            data: Content of the file.

        Returns:
            Path of the created file.

        Raises:
            FileSystemError: If the directory or file cannot be created or written.
        """
        try:
            self._root.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise FileSystemError(f"Cannot create scratch directory {self._root}: {e}") from e

        path = self._root / self._unique_name()
        try:
            with open(path, "xb") as f:
                f.write(data)
        except OSError as e:
            path.unlink(missing_ok=True)
            raise FileSystemError(f"Cannot write scratch file {path}: {e}") from e

        logger.debug(f"Wrote {len(data)} bytes to {path}")
        return path

    def delete(self, path: Path) -> None:
        """Remove a scratch file, ignoring one that is already gone.

        Raises:
            FileSystemError: If the file exists but cannot be removed.
        """
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            raise FileSystemError(f"Cannot remove scratch file {path}: {e}") from e


@contextmanager
def scratch_file(provider: TempFileProvider, data: bytes) -> Iterator[Path]:
    """Yield a scratch file holding ``data`` and delete it on exit.

    Deletion failures are logged and never replace the result or error of
    the body.
    """
    path = provider.create(data)
    try:
        yield path
    finally:
        try:
            provider.delete(path)
        except FileSystemError as e:
            logger.warning(f"Error cleaning up temporary file: {e}")
