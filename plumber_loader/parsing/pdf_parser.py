"""PDF extraction backend using pdfplumber.

Extracts page text, document info and, optionally, OCR text of embedded
images from a PDF file on disk.
"""

import logging
from pathlib import Path
from typing import Any

import pdfplumber
import pytesseract
from pdfplumber.page import Page
from pdfplumber.utils.exceptions import PdfminerException

from plumber_loader.errors import ExtractionError
from plumber_loader.models.schemas import Document

logger = logging.getLogger(__name__)

# Constants
DEFAULT_MAX_FILE_SIZE = 50 * 1024 * 1024  # 50MB
DEFAULT_OCR_RESOLUTION = 200
PDF_MAGIC_BYTES = b"%PDF"
_HEADER_PROBE = 1024


def _validate_pdf_file(file_path: Path, max_file_size: int) -> None:
    """Validate a PDF file before parsing.

    Args:
        file_path: Location of the PDF file.
        max_file_size: Largest accepted size in bytes.

    Raises:
        ExtractionError: If validation fails.
    """
    try:
        size = file_path.stat().st_size
        with open(file_path, "rb") as f:
            head = f.read(_HEADER_PROBE)
    except OSError as e:
        raise ExtractionError(f"Cannot read PDF file {file_path.name}: {e}") from e

    if size == 0:
        raise ExtractionError("Empty file provided")

    if size > max_file_size:
        size_mb = size / (1024 * 1024)
        limit_mb = max_file_size / (1024 * 1024)
        raise ExtractionError(
            f"File size ({size_mb:.1f}MB) exceeds maximum allowed ({limit_mb:.0f}MB)"
        )

    if not head.lstrip()[:10].startswith(PDF_MAGIC_BYTES):
        raise ExtractionError("Invalid PDF: file does not start with PDF header")


def _extract_info(pdf: pdfplumber.PDF) -> dict[str, Any]:
    """Extract scalar document-info entries (Title, Author, ...).

    Values pdfminer leaves as bytes or PDF objects are dropped.
    """
    info: dict[str, Any] = {}

    try:
        for key, value in (pdf.metadata or {}).items():
            if isinstance(value, (str, int, float, bool)):
                info[key] = value
    except Exception as e:
        logger.warning(f"Failed to extract some metadata: {e}")

    return info


def _clamp_bbox(
    bbox: tuple[float, float, float, float],
    page_bbox: tuple[float, float, float, float],
) -> tuple[float, float, float, float] | None:
    """Intersect an image box with the page box, None if nothing is left."""
    x0 = max(bbox[0], page_bbox[0])
    top = max(bbox[1], page_bbox[1])
    x1 = min(bbox[2], page_bbox[2])
    bottom = min(bbox[3], page_bbox[3])

    if x1 <= x0 or bottom <= top:
        return None
    return (x0, top, x1, bottom)


class PdfPlumberBackend:
    """Text extraction backend built on pdfplumber.

    Produces one Document per page, or one per file when page splitting is
    off. Embedded images are OCR'd with tesseract when requested.
    """

    def __init__(
        self,
        max_file_size: int = DEFAULT_MAX_FILE_SIZE,
        ocr_resolution: int = DEFAULT_OCR_RESOLUTION,
    ) -> None:
        self._max_file_size = max_file_size
        self._ocr_resolution = ocr_resolution

    def load(
        self,
        file_path: Path,
        split_pages: bool = True,
        extract_images: bool = False,
        lang: str | None = None,
    ) -> list[Document]:
        """Parse a PDF file into documents.

        Args:
            file_path: Location of the PDF file.
            split_pages: One document per page when True, one per file otherwise.
            extract_images: OCR embedded images and append their text.
            lang: Tesseract language code(s) for image OCR, e.g. "eng+fra".

        Returns:
            Documents in page order.

        Raises:
            ExtractionError: If the file is invalid, too large, empty, or corrupt.
        """
        _validate_pdf_file(file_path, self._max_file_size)

        try:
            with pdfplumber.open(file_path) as pdf:
                return self._extract(pdf, file_path, split_pages, extract_images, lang)
        except ExtractionError:
            raise
        except PdfminerException as e:
            raise ExtractionError(f"Corrupt or invalid PDF: {e}") from e
        except Exception as e:
            raise ExtractionError(f"Failed to read PDF: {e}") from e

    def _extract(
        self,
        pdf: pdfplumber.PDF,
        file_path: Path,
        split_pages: bool,
        extract_images: bool,
        lang: str | None,
    ) -> list[Document]:
        total_pages = len(pdf.pages)
        base_metadata: dict[str, Any] = {
            "source": str(file_path),
            "file_path": str(file_path),
            "total_pages": total_pages,
            **_extract_info(pdf),
        }

        page_texts: list[str] = []
        for i, page in enumerate(pdf.pages):
            text = self._page_text(page, i)
            if extract_images:
                image_text = self._ocr_page_images(page, i, lang)
                if image_text:
                    text = f"{text}\n{image_text}" if text else image_text
            page_texts.append(text)

        if not any(t.strip() for t in page_texts):
            logger.warning(
                f"{file_path.name} contains no extractable text (may be scanned/image-based)"
            )

        if not split_pages:
            return [Document(page_content="\n\n".join(page_texts), metadata=base_metadata)]

        return [
            Document(page_content=text, metadata={**base_metadata, "page": i})
            for i, text in enumerate(page_texts)
        ]

    @staticmethod
    def _page_text(page: Page, index: int) -> str:
        try:
            return page.extract_text() or ""
        except Exception as e:
            logger.warning(f"Failed to extract text from page {index + 1}: {e}")
            return ""

    def _ocr_page_images(self, page: Page, index: int, lang: str | None) -> str:
        """Run OCR over every embedded image on a page.

        Args:
            page: pdfplumber page.
            index: Zero-based page number, used in log messages.
            lang: Tesseract language code(s), tesseract default when None.

        Returns:
            Recognized text of all images, newline separated.

        Raises:
            ExtractionError: If the tesseract binary is not installed.
        """
        ocr_kwargs = {"lang": lang} if lang else {}
        texts: list[str] = []

        for n, image in enumerate(page.images):
            bbox = _clamp_bbox(
                (image["x0"], image["top"], image["x1"], image["bottom"]),
                page.bbox,
            )
            if bbox is None:
                continue

            try:
                rendered = page.crop(bbox).to_image(resolution=self._ocr_resolution).original
                text = pytesseract.image_to_string(rendered, **ocr_kwargs)
            except pytesseract.TesseractNotFoundError as e:
                raise ExtractionError(
                    "Image extraction requires the tesseract-ocr binary"
                ) from e
            except Exception as e:
                logger.warning(f"OCR failed for image {n + 1} on page {index + 1}: {e}")
                continue

            if text.strip():
                texts.append(text.strip())

        return "\n".join(texts)
