"""Extraction backend adapter.

Materializes PDF bytes as a scratch file, runs the path-based extraction
backend over it, and optionally passes the result through a text splitter.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Protocol

from plumber_loader.loader.scratch import TempFileProvider, scratch_file
from plumber_loader.models.schemas import Document, UsageMode
from plumber_loader.parsing.splitter import TextSplitter

logger = logging.getLogger(__name__)


class ExtractionBackend(Protocol):
    """Converts a PDF file on disk into documents."""

    def load(self, file_path: Path, **options: Any) -> list[Document]: ...


@dataclass(frozen=True)
class ExtractionRequest:
    """Per-file extraction input, consumed once."""

    raw_bytes: bytes
    per_page: bool = True
    extract_images: bool | None = None
    ocr_language: str | None = None

    @classmethod
    def build(
        cls,
        raw_bytes: bytes,
        usage: UsageMode,
        extract_images: bool | None,
        language: str | None,
    ) -> "ExtractionRequest":
        return cls(
            raw_bytes=raw_bytes,
            per_page=usage == UsageMode.PER_PAGE,
            extract_images=extract_images,
            ocr_language=language,
        )

    def backend_options(self) -> dict[str, Any]:
        """Backend keyword arguments; unset options keep backend defaults."""
        options: dict[str, Any] = {"split_pages": self.per_page}
        if self.extract_images is not None:
            options["extract_images"] = self.extract_images
        if self.ocr_language:
            options["lang"] = self.ocr_language
        return options


def extract_documents(
    request: ExtractionRequest,
    backend: ExtractionBackend,
    scratch: TempFileProvider,
    docs: list[Document],
    text_splitter: TextSplitter | None = None,
) -> None:
    """Extract one PDF and append its documents to ``docs``.

    Args:
        request: Bytes and options for this file.
        backend: Path-based extraction backend.
        scratch: Provider of the temporary file handed to the backend.
        docs: Accumulator shared across the files of one call.
        text_splitter: Optional splitter applied to the backend output.

    Raises:
        ExtractionError: If the backend cannot parse the bytes.
        FileSystemError: If the scratch file cannot be created.
    """
    with scratch_file(scratch, request.raw_bytes) as path:
        extracted = backend.load(path, **request.backend_options())
        logger.debug(f"Backend returned {len(extracted)} documents for {path.name}")

        if text_splitter is not None:
            extracted = text_splitter.split_documents(extracted)

    docs.extend(extracted)
