"""Input resolution: turn the source field into raw PDF byte buffers.

The source field carries either storage references
(``FILE-STORAGE::name.pdf`` or ``FILE-STORAGE::["a.pdf","b.pdf"]``) or inline
data URIs (``data:application/pdf;base64,<payload>,filename:<name>``), as a
scalar or as a JSON array.
"""

import base64
import binascii
import json
import logging

from plumber_loader.errors import MalformedInputError
from plumber_loader.models.schemas import (
    ClassifiedSource,
    InlineData,
    StorageContext,
    StorageRefs,
)
from plumber_loader.storage.file_storage import FileStorage

logger = logging.getLogger(__name__)

STORAGE_PREFIX = "FILE-STORAGE::"
_FILENAME_SEGMENT = "filename:"


def _is_array_literal(value: str) -> bool:
    # An opening bracket alone declares an array, so "[a.pdf" fails as bad JSON
    return value.lstrip().startswith("[")


def _parse_string_list(value: str, label: str) -> list[str]:
    """Parse a JSON array of strings.

    Raises:
        MalformedInputError: If the text is not valid JSON or not a list of strings.
    """
    try:
        parsed = json.loads(value)
    except json.JSONDecodeError as e:
        raise MalformedInputError(f"Invalid JSON array in {label}: {e}") from e

    if not isinstance(parsed, list) or not all(isinstance(item, str) for item in parsed):
        raise MalformedInputError(f"Expected a JSON array of strings in {label}")

    return parsed


def classify_source(source: str) -> ClassifiedSource:
    """Classify the raw source field once, before any I/O.

    Args:
        source: Storage reference or inline data, scalar or JSON array.

    Returns:
        StorageRefs or InlineData listing the individual entries.

    Raises:
        MalformedInputError: If an array literal is not a JSON list of strings.
    """
    if source.startswith(STORAGE_PREFIX):
        remainder = source[len(STORAGE_PREFIX):]
        if _is_array_literal(remainder):
            return StorageRefs(keys=_parse_string_list(remainder, "storage reference"))
        return StorageRefs(keys=[remainder])

    if _is_array_literal(source):
        return InlineData(entries=_parse_string_list(source, "inline data"))
    return InlineData(entries=[source])


def decode_data_uri(entry: str) -> bytes:
    """Decode the base64 payload of a data URI.

    A trailing ``filename:`` segment and a leading ``data:`` segment are
    discarded; the segment left over is the payload.

    Raises:
        MalformedInputError: If the payload is not valid base64.
    """
    segments = entry.split(",")
    if len(segments) > 1 and segments[-1].startswith(_FILENAME_SEGMENT):
        segments.pop()
    if len(segments) > 1 and segments[0].startswith("data:"):
        segments.pop(0)
    payload = "".join(segments[-1].split())

    try:
        return base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        raise MalformedInputError(f"Invalid base64 payload in data URI: {e}") from e


def resolve_sources(
    classified: ClassifiedSource,
    storage: FileStorage,
    context: StorageContext | None = None,
) -> list[bytes]:
    """Fetch or decode every entry of a classified source.

    Args:
        classified: Classified source field.
        storage: Backend used for storage references.
        context: Organization and flow of the stored files.

    Returns:
        Byte buffers in entry order; empty entries are skipped.

    Raises:
        MalformedInputError: If storage references are given without a context,
            or a data URI cannot be decoded.
        StorageFetchError: If the storage backend fails for a key.
    """
    if isinstance(classified, StorageRefs):
        keys = [key for key in classified.keys if key]
        if keys and context is None:
            raise MalformedInputError(
                "Storage references require an organization and flow identifier"
            )

        buffers: list[bytes] = []
        for key in keys:
            logger.debug(f"Fetching {key} from storage ({context.org_id}/{context.flow_id})")
            buffers.append(storage.get_file(key, context.org_id, context.flow_id))
        return buffers

    return [decode_data_uri(entry) for entry in classified.entries if entry]
