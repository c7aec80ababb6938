"""Loader configuration with environment variable loading.

Pydantic-based configuration for scratch space, file storage and the
pdfplumber extraction backend.
"""

import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

# Load environment variables from .env file
load_dotenv()

DEFAULT_SCRATCH_DIR = "/tmp/plumber-loader"
DEFAULT_STORAGE_PATH = "~/.plumber-loader/storage"


class LoaderConfig(BaseModel):
    """Configuration for the document loader service.

    Attributes:
        scratch_dir: Directory where PDF bytes are materialized for extraction.
        storage_path: Root directory of the local file storage backend.
        max_file_size_mb: Largest PDF accepted by the extraction backend.
        ocr_resolution: DPI used when rendering embedded images for OCR.
    """

    scratch_dir: Path = Field(
        default_factory=lambda: Path(os.getenv("SCRATCH_DIR", DEFAULT_SCRATCH_DIR)),
        description="Shared scratch directory for temporary PDF files",
    )
    storage_path: Path = Field(
        default_factory=lambda: Path(os.getenv("STORAGE_PATH", DEFAULT_STORAGE_PATH)),
        description="Root of the local file storage",
    )
    max_file_size_mb: int = Field(
        default_factory=lambda: int(os.getenv("PDF_MAX_FILE_SIZE_MB", "50")),
        ge=1,
        le=1024,
        description="Maximum PDF size in megabytes",
    )
    ocr_resolution: int = Field(
        default_factory=lambda: int(os.getenv("OCR_RESOLUTION", "200")),
        ge=72,
        le=600,
        description="Rendering resolution for image OCR",
    )

    @field_validator("storage_path")
    @classmethod
    def expand_storage_path(cls, v: Path) -> Path:
        """Expand a leading ~ so the storage root is absolute."""
        return v.expanduser()

    @property
    def max_file_size(self) -> int:
        """Maximum PDF size in bytes."""
        return self.max_file_size_mb * 1024 * 1024


def get_loader_config() -> LoaderConfig:
    """Create loader configuration from environment.

    Returns:
        Configured LoaderConfig instance.

    Raises:
        ValueError: If an environment value is out of range.
    """
    return LoaderConfig()
