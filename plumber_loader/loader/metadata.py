"""Metadata merging and key omission across a document set.

Additional metadata is merged on top of extraction metadata, then every
omitted key, including dotted nested paths such as ``pdf.info.Title``, is
removed. The raw omission value ``*`` replaces extraction metadata entirely.
"""

import copy
import json
from collections.abc import MutableMapping
from typing import Any

from plumber_loader.errors import MalformedInputError
from plumber_loader.models.schemas import Absent, Document, JsonText, MetadataValue, RawMap

OMIT_ALL = "*"


def classify_metadata(value: dict[str, Any] | str | None) -> MetadataValue:
    """Classify the additional-metadata field once at the boundary."""
    if isinstance(value, dict):
        return RawMap(value=value)
    if isinstance(value, str) and value:
        return JsonText(text=value)
    return Absent()


def resolve_metadata(value: MetadataValue) -> dict[str, Any] | None:
    """Return the additional metadata as a mapping, or None when absent.

    Raises:
        MalformedInputError: If JSON text is invalid or not an object.
    """
    if isinstance(value, RawMap):
        return value.value
    if isinstance(value, JsonText):
        try:
            parsed = json.loads(value.text)
        except json.JSONDecodeError as e:
            raise MalformedInputError(f"Invalid JSON in additional metadata: {e}") from e
        if not isinstance(parsed, dict):
            raise MalformedInputError("Additional metadata must be a JSON object")
        return parsed
    return None


def parse_omit_keys(raw: str | None) -> frozenset[str]:
    """Split a comma-separated key list into trimmed key names."""
    if not raw:
        return frozenset()
    return frozenset(key.strip() for key in raw.split(",") if key.strip())


def delete_path(mapping: MutableMapping[str, Any], path: str) -> None:
    """Delete a possibly dotted key path from a nested mapping in place.

    A top-level key that itself contains dots wins over the nested reading.
    Missing segments are ignored.
    """
    if path in mapping:
        del mapping[path]
        return

    head, sep, rest = path.partition(".")
    if not sep:
        return

    child = mapping.get(head)
    if isinstance(child, MutableMapping):
        delete_path(child, rest)


def merge_metadata(
    docs: list[Document],
    additional: dict[str, Any] | None,
    omit_keys_raw: str | None,
) -> list[Document]:
    """Apply additional metadata and omission rules to every document.

    Args:
        docs: Accumulated documents.
        additional: Parsed additional metadata, None when absent.
        omit_keys_raw: Raw comma-separated omission field, or ``*``.

    Returns:
        New documents with merged metadata, in the same order.
    """
    if omit_keys_raw == OMIT_ALL:
        return [
            Document(page_content=doc.page_content, metadata=copy.deepcopy(additional or {}))
            for doc in docs
        ]

    omit_keys = parse_omit_keys(omit_keys_raw)
    merged_docs: list[Document] = []
    for doc in docs:
        metadata = copy.deepcopy(doc.metadata)
        if additional:
            metadata.update(copy.deepcopy(additional))
        for key in sorted(omit_keys):
            delete_path(metadata, key)
        merged_docs.append(Document(page_content=doc.page_content, metadata=metadata))

    return merged_docs
