"""Pydantic models for loader inputs, outputs and boundary variants.

Provides type safety, validation, and automatic OpenAPI documentation.

Models:
    - Document: Extracted text plus metadata
    - LoadRequest: Fields of one loader invocation
    - LoadDocumentsRequest: HTTP body with storage context and chunking
    - LoadResponse: Document list or concatenated text
    - StorageRefs / InlineData: Classified source field
    - RawMap / JsonText / Absent: Classified metadata field
"""

from plumber_loader.models.schemas import (
    Absent,
    ClassifiedSource,
    Document,
    InlineData,
    JsonText,
    LoadDocumentsRequest,
    LoadRequest,
    LoadResponse,
    MetadataValue,
    OutputMode,
    RawMap,
    StorageContext,
    StorageRefs,
    UsageMode,
)

__all__ = [
    "Absent",
    "ClassifiedSource",
    "Document",
    "InlineData",
    "JsonText",
    "LoadDocumentsRequest",
    "LoadRequest",
    "LoadResponse",
    "MetadataValue",
    "OutputMode",
    "RawMap",
    "StorageContext",
    "StorageRefs",
    "UsageMode",
]
