"""Document loader service: the full extraction pipeline for one call.

Input resolution -> per-file extraction -> metadata merge -> output shape.

Files are processed one after another; each one is written to scratch,
extracted and cleaned up before the next begins, so output order is file
order, then page order. Any stage failure aborts the whole call.
"""

import logging

from plumber_loader.config import LoaderConfig, get_loader_config
from plumber_loader.loader.extraction import ExtractionBackend, ExtractionRequest, extract_documents
from plumber_loader.loader.metadata import classify_metadata, merge_metadata, resolve_metadata
from plumber_loader.loader.output import format_output
from plumber_loader.loader.resolver import classify_source, resolve_sources
from plumber_loader.loader.scratch import ScratchDirectory, TempFileProvider
from plumber_loader.models.schemas import Document, LoadRequest, StorageContext
from plumber_loader.parsing.pdf_parser import PdfPlumberBackend
from plumber_loader.parsing.splitter import TextSplitter
from plumber_loader.storage.file_storage import FileStorage, LocalFileStorage

logger = logging.getLogger(__name__)


class DocumentLoaderService:
    """Loads PDF sources into documents or text.

    Collaborators are injected so tests can swap the storage backend, the
    scratch space and the extraction backend.
    """

    def __init__(
        self,
        storage: FileStorage,
        scratch: TempFileProvider,
        backend: ExtractionBackend,
    ) -> None:
        self._storage = storage
        self._scratch = scratch
        self._backend = backend

    @classmethod
    def from_config(cls, config: LoaderConfig | None = None) -> "DocumentLoaderService":
        """Build a service backed by local storage, disk scratch and pdfplumber.

        Args:
            config: Optional loader configuration.
                    Loads from environment if not provided.
        """
        config = config or get_loader_config()
        return cls(
            storage=LocalFileStorage(config.storage_path),
            scratch=ScratchDirectory(config.scratch_dir),
            backend=PdfPlumberBackend(
                max_file_size=config.max_file_size,
                ocr_resolution=config.ocr_resolution,
            ),
        )

    def load(
        self,
        request: LoadRequest,
        context: StorageContext | None = None,
        text_splitter: TextSplitter | None = None,
    ) -> list[Document] | str:
        """Run the pipeline for one request.

        Args:
            request: Source and options of this call.
            context: Organization and flow for storage references.
            text_splitter: Optional splitter applied to each file's documents.

        Returns:
            Documents in document mode, the concatenated text in text mode.

        Raises:
            MalformedInputError: If the source or metadata field is malformed.
            StorageFetchError: If a referenced file cannot be fetched.
            ExtractionError: If a PDF cannot be parsed.
            FileSystemError: If a scratch file cannot be written.
        """
        classified = classify_source(request.source)
        additional = resolve_metadata(classify_metadata(request.metadata))
        buffers = resolve_sources(classified, self._storage, context)

        docs: list[Document] = []
        for raw_bytes in buffers:
            extract_documents(
                ExtractionRequest.build(
                    raw_bytes,
                    usage=request.usage,
                    extract_images=request.extract_images,
                    language=request.language,
                ),
                backend=self._backend,
                scratch=self._scratch,
                docs=docs,
                text_splitter=text_splitter,
            )

        docs = merge_metadata(docs, additional, request.omit_metadata_keys)

        logger.info(
            f"Loaded {len(buffers)} file(s) into {len(docs)} document(s) "
            f"(usage={request.usage.value}, output={request.output.value})"
        )
        return format_output(docs, request.output)


_service: DocumentLoaderService | None = None


def get_loader_service() -> DocumentLoaderService:
    """Get or create the shared loader service.

    Returns:
        Process-wide DocumentLoaderService built from the environment.
    """
    global _service
    if _service is None:
        _service = DocumentLoaderService.from_config()
    return _service


def reset_loader_service() -> None:
    """Drop the shared service so the next call rebuilds it."""
    global _service
    _service = None
