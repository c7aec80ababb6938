"""File storage backends for resolving storage references.

Files are addressed by key within an organization and flow namespace.
"""

import logging
from pathlib import Path
from typing import Protocol

from plumber_loader.errors import StorageFetchError

logger = logging.getLogger(__name__)


class FileStorage(Protocol):
    """Read access to durably stored files."""

    def get_file(self, key: str, org_id: str, flow_id: str) -> bytes: ...


def _validate_segment(value: str, label: str) -> str:
    """Reject path components that could escape the storage root.

    Args:
        value: A key or namespace identifier.
        label: Name used in the error message.

    Returns:
        The unchanged value.

    Raises:
        StorageFetchError: If the value is empty or contains a path traversal.
    """
    if not value or not value.strip():
        raise StorageFetchError(f"Empty {label}")

    if "/" in value or "\\" in value or value in (".", "..") or "\x00" in value:
        raise StorageFetchError(f"Invalid {label}: {value!r}")

    return value


class LocalFileStorage:
    """File storage on the local disk.

    Layout is ``<root>/<org_id>/<flow_id>/<key>``.
    """

    def __init__(self, root: Path) -> None:
        self._root = root

    @property
    def root(self) -> Path:
        return self._root

    def get_file(self, key: str, org_id: str, flow_id: str) -> bytes:
        """Read a stored file.

        Args:
            key: File name within the flow namespace.
            org_id: Organization identifier.
            flow_id: Flow identifier.

        Returns:
            Raw file content.

        Raises:
            StorageFetchError: If the key is invalid, missing or unreadable.
        """
        path = (
            self._root
            / _validate_segment(org_id, "organization id")
            / _validate_segment(flow_id, "flow id")
            / _validate_segment(key, "file key")
        )

        try:
            data = path.read_bytes()
        except FileNotFoundError as e:
            raise StorageFetchError(f"File not found in storage: {key}") from e
        except OSError as e:
            raise StorageFetchError(f"Failed to read {key} from storage: {e}") from e

        logger.debug(f"Read {len(data)} bytes for {key} from {path.parent}")
        return data
