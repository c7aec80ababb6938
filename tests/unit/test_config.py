"""Unit tests for LoaderConfig and service construction."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from plumber_loader.config import LoaderConfig, get_loader_config
from plumber_loader.loader import service as service_module
from plumber_loader.loader.scratch import ScratchDirectory
from plumber_loader.loader.service import (
    DocumentLoaderService,
    get_loader_service,
    reset_loader_service,
)
from plumber_loader.storage.file_storage import LocalFileStorage


class TestLoaderConfig:
    """Tests for LoaderConfig validation."""

    def test_valid_config_with_all_fields(self, tmp_path: Path) -> None:
        """Config accepts valid values for all fields."""
        config = LoaderConfig(
            scratch_dir=tmp_path / "scratch",
            storage_path=tmp_path / "storage",
            max_file_size_mb=5,
            ocr_resolution=300,
        )

        assert config.scratch_dir == tmp_path / "scratch"
        assert config.storage_path == tmp_path / "storage"
        assert config.max_file_size == 5 * 1024 * 1024
        assert config.ocr_resolution == 300

    def test_config_reads_environment(
        self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path
    ) -> None:
        """Defaults come from environment variables."""
        monkeypatch.setenv("SCRATCH_DIR", str(tmp_path / "env-scratch"))
        monkeypatch.setenv("STORAGE_PATH", str(tmp_path / "env-storage"))
        monkeypatch.setenv("PDF_MAX_FILE_SIZE_MB", "7")

        config = get_loader_config()

        assert config.scratch_dir == tmp_path / "env-scratch"
        assert config.storage_path == tmp_path / "env-storage"
        assert config.max_file_size_mb == 7

    def test_config_with_default_values(self, monkeypatch: pytest.MonkeyPatch) -> None:
        for name in ("SCRATCH_DIR", "STORAGE_PATH", "PDF_MAX_FILE_SIZE_MB", "OCR_RESOLUTION"):
            monkeypatch.delenv(name, raising=False)

        config = LoaderConfig()

        assert config.scratch_dir == Path("/tmp/plumber-loader")
        assert config.storage_path == Path("~/.plumber-loader/storage").expanduser()
        assert config.max_file_size_mb == 50
        assert config.ocr_resolution == 200

    def test_config_fails_with_file_size_too_low(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            LoaderConfig(max_file_size_mb=0)

        assert "max_file_size_mb" in str(exc_info.value)

    def test_config_fails_with_resolution_out_of_range(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            LoaderConfig(ocr_resolution=1200)

        assert "ocr_resolution" in str(exc_info.value)


class TestLoaderServiceSingleton:
    """Tests for the shared service lifecycle."""

    def test_from_config_wires_collaborators(self, tmp_path: Path) -> None:
        config = LoaderConfig(scratch_dir=tmp_path / "s", storage_path=tmp_path / "st")

        service = DocumentLoaderService.from_config(config)

        assert isinstance(service._storage, LocalFileStorage)
        assert service._storage.root == tmp_path / "st"
        assert isinstance(service._scratch, ScratchDirectory)
        assert service._scratch.root == tmp_path / "s"

    def test_singleton_reused_until_reset(
        self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path
    ) -> None:
        monkeypatch.setattr(service_module, "_service", None)
        monkeypatch.setenv("SCRATCH_DIR", str(tmp_path / "scratch"))

        first = get_loader_service()
        second = get_loader_service()
        reset_loader_service()
        third = get_loader_service()

        assert first is second
        assert third is not first
