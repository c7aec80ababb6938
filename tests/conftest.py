"""Pytest fixtures and shared test configuration.

Provides reusable fixtures for unit and integration tests.

Fixtures:
    - scratch_dir: Isolated scratch directory per test
    - fake_backend: Extraction backend reading "page|page" text files
    - fake_storage: In-memory file storage recording fetches
    - loader_service: Service wired to the fakes
    - shared_service: loader_service installed as the process-wide service
    - async_client: HTTPX client for API testing

PDFs are generated in memory (see tests/fakes.py), so no binary fixtures
are checked in.
"""

from collections.abc import AsyncGenerator
from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient

from plumber_loader.api import app
from plumber_loader.loader import service as service_module
from plumber_loader.loader.scratch import ScratchDirectory
from plumber_loader.loader.service import DocumentLoaderService
from tests.fakes import FakeBackend, FakeStorage


@pytest.fixture
def scratch_dir(tmp_path: Path) -> Path:
    """Return an isolated, not yet created scratch directory."""
    return tmp_path / "scratch"


@pytest.fixture
def fake_backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def fake_storage() -> FakeStorage:
    return FakeStorage()


@pytest.fixture
def loader_service(
    fake_storage: FakeStorage, fake_backend: FakeBackend, scratch_dir: Path
) -> DocumentLoaderService:
    """Loader service wired to in-memory storage and the fake backend."""
    return DocumentLoaderService(
        storage=fake_storage,
        scratch=ScratchDirectory(scratch_dir),
        backend=fake_backend,
    )


@pytest.fixture
def shared_service(
    monkeypatch: pytest.MonkeyPatch, loader_service: DocumentLoaderService
) -> DocumentLoaderService:
    """Install loader_service as the process-wide service."""
    monkeypatch.setattr(service_module, "_service", loader_service)
    return loader_service


@pytest.fixture
async def async_client() -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client for API testing.

    Yields:
        Configured AsyncClient for making test requests.
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
