"""Document load endpoint.

Runs the loader pipeline for a JSON request and maps loader errors to HTTP
status codes.
"""

import logging

from fastapi import APIRouter, HTTPException, status
from fastapi.concurrency import run_in_threadpool

from plumber_loader.errors import (
    ExtractionError,
    FileSystemError,
    LoaderError,
    MalformedInputError,
    StorageFetchError,
)
from plumber_loader.loader.service import get_loader_service
from plumber_loader.models.schemas import (
    LoadDocumentsRequest,
    LoadResponse,
    OutputMode,
    StorageContext,
)
from plumber_loader.parsing.splitter import RecursiveTextSplitter, TextSplitter

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/documents", tags=["documents"])

_ERROR_STATUS: dict[type[LoaderError], int] = {
    MalformedInputError: status.HTTP_400_BAD_REQUEST,
    StorageFetchError: status.HTTP_404_NOT_FOUND,
    ExtractionError: status.HTTP_422_UNPROCESSABLE_CONTENT,
    FileSystemError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def _storage_context(body: LoadDocumentsRequest) -> StorageContext | None:
    """Build the storage context when both identifiers are present."""
    if body.org_id and body.flow_id:
        return StorageContext(org_id=body.org_id, flow_id=body.flow_id)
    return None


def _text_splitter(body: LoadDocumentsRequest) -> TextSplitter | None:
    """Build a recursive splitter from the chunking options.

    Raises:
        HTTPException: 400 if the overlap is not smaller than the chunk size.
    """
    if body.chunk_size is None:
        return None

    try:
        return RecursiveTextSplitter(
            chunk_size=body.chunk_size,
            chunk_overlap=body.chunk_overlap,
        )
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        ) from e


@router.post("/load", response_model=LoadResponse)
async def load_documents(body: LoadDocumentsRequest) -> LoadResponse:
    """Load PDF sources into documents or concatenated text.

    Extraction is blocking, so it runs in the threadpool.

    Args:
        body: Source, extraction options, metadata rules and output mode.

    Returns:
        LoadResponse with either documents or text.

    Raises:
        400: Malformed source or metadata field.
        404: Referenced file missing from storage.
        422: PDF could not be parsed.
        500: Scratch file could not be written.
    """
    splitter = _text_splitter(body)
    service = get_loader_service()

    try:
        result = await run_in_threadpool(
            service.load, body, _storage_context(body), splitter
        )
    except LoaderError as e:
        code = _ERROR_STATUS.get(type(e), status.HTTP_500_INTERNAL_SERVER_ERROR)
        logger.warning(f"Load failed ({type(e).__name__}): {e}")
        raise HTTPException(status_code=code, detail=str(e)) from e

    if body.output == OutputMode.TEXT:
        return LoadResponse(output=OutputMode.TEXT, text=result)
    return LoadResponse(output=OutputMode.DOCUMENT, documents=result)
