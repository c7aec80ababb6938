from enum import Enum
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class UsageMode(str, Enum):
    """Page-splitting policy for the extraction backend."""

    PER_PAGE = "perPage"
    PER_FILE = "perFile"


class OutputMode(str, Enum):
    """Shape of the loader result."""

    DOCUMENT = "document"
    TEXT = "text"


class Document(BaseModel):
    """A unit of extracted text plus its metadata.

    Attributes:
        page_content: Text of one page, one file, or one split chunk.
        metadata: Extraction metadata merged with caller-supplied metadata.
    """

    model_config = ConfigDict(populate_by_name=True)

    page_content: str = Field(..., alias="pageContent")
    metadata: dict[str, Any] = Field(default_factory=dict)


class StorageContext(BaseModel):
    """Ambient identifiers needed to resolve storage references.

    Attributes:
        org_id: Organization owning the stored files.
        flow_id: Flow the files were uploaded to.
    """

    model_config = ConfigDict(frozen=True)

    org_id: str = Field(..., min_length=1)
    flow_id: str = Field(..., min_length=1)


class StorageRefs(BaseModel):
    """Source field classified as references into file storage."""

    model_config = ConfigDict(frozen=True)

    keys: list[str]


class InlineData(BaseModel):
    """Source field classified as inline base64 data URIs."""

    model_config = ConfigDict(frozen=True)

    entries: list[str]


ClassifiedSource = StorageRefs | InlineData


class RawMap(BaseModel):
    """Additional metadata supplied as an already-parsed mapping."""

    model_config = ConfigDict(frozen=True)

    value: dict[str, Any]


class JsonText(BaseModel):
    """Additional metadata supplied as JSON text."""

    model_config = ConfigDict(frozen=True)

    text: str


class Absent(BaseModel):
    """No additional metadata supplied."""

    model_config = ConfigDict(frozen=True)


MetadataValue = RawMap | JsonText | Absent


class LoadRequest(BaseModel):
    """Input fields of a single loader invocation.

    Field names also accept the camelCase spelling used by flow descriptors
    (pdfFile, extractImages, omitMetadataKeys, outputMode).

    Attributes:
        source: Storage reference or inline data URI(s), scalar or JSON array.
        usage: One document per page or one per file.
        extract_images: Forwarded to the backend when set.
        language: OCR language hint, e.g. "eng".
        metadata: Additional metadata as a mapping or JSON string.
        omit_metadata_keys: Comma-separated (dotted) keys to drop, or "*".
        output: Result shape.
    """

    source: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("source", "pdfFile"),
    )
    usage: UsageMode = UsageMode.PER_PAGE
    extract_images: bool | None = Field(
        None,
        validation_alias=AliasChoices("extract_images", "extractImages"),
    )
    language: str | None = None
    metadata: dict[str, Any] | str | None = None
    omit_metadata_keys: str | None = Field(
        None,
        validation_alias=AliasChoices("omit_metadata_keys", "omitMetadataKeys"),
    )
    output: OutputMode = Field(
        OutputMode.DOCUMENT,
        validation_alias=AliasChoices("output", "outputMode"),
    )


class LoadDocumentsRequest(LoadRequest):
    """HTTP request body for the load endpoint.

    Attributes:
        org_id: Organization for storage references.
        flow_id: Flow for storage references.
        chunk_size: When set, documents are split into chunks of this size.
        chunk_overlap: Characters shared between consecutive chunks.
    """

    org_id: str | None = Field(None, validation_alias=AliasChoices("org_id", "orgId"))
    flow_id: str | None = Field(
        None,
        validation_alias=AliasChoices("flow_id", "chatflowid", "flowId"),
    )
    chunk_size: int | None = Field(None, ge=1)
    chunk_overlap: int = Field(0, ge=0)

    @field_validator("org_id", "flow_id", mode="before")
    @classmethod
    def blank_to_none(cls, v: Any) -> Any:
        """Treat blank identifiers as missing."""
        if isinstance(v, str) and not v.strip():
            return None
        return v


class LoadResponse(BaseModel):
    """Result of a load call.

    Attributes:
        output: Which of documents/text is populated.
        documents: Document records in file order, then page order.
        text: Concatenated, escape-normalized page contents.
    """

    output: OutputMode
    documents: list[Document] | None = None
    text: str | None = None
