"""Shared pytest fixtures for photo gallery tests."""

import shutil
import tempfile
from collections.abc import Generator
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from photogallery.core.config import GalleryConfig
from photogallery.core.gallery_db import GalleryDB
from photogallery.ui.models import GalleryViewState


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files.

    Yields:
        Path to temporary directory

    Cleanup:
        Directory is removed after test completes
    """
    temp_path = Path(tempfile.mkdtemp())
    try:
        yield temp_path
    finally:
        shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def test_config(temp_dir: Path) -> GalleryConfig:
    """Create a test configuration pointing at a temporary database.

    Args:
        temp_dir: Temporary directory from fixture

    Returns:
        GalleryConfig instance for testing
    """
    return GalleryConfig(
        db_path=str(temp_dir / "data" / "gallery.db"),
        server_port=3000,
        _env_file=None,
    )


@pytest.fixture
def gallery_db(test_config: GalleryConfig) -> GalleryDB:
    """Create a seeded gallery database in the temporary directory."""
    return GalleryDB(test_config.db_path)


@pytest.fixture
def test_client(test_config: GalleryConfig, monkeypatch) -> Generator[TestClient, None, None]:
    """FastAPI TestClient with the lifespan running against a temporary database.

    The module-level ``config`` of :mod:`photogallery.api.main` is swapped for
    the test configuration before the lifespan opens the database.
    """
    import photogallery.api.main as main_module

    monkeypatch.setattr(main_module, "config", test_config)
    with TestClient(main_module.app) as client:
        yield client


@pytest.fixture
def sample_fields() -> dict[str, str]:
    """A complete, valid set of entry fields.

    Returns:
        Dictionary suitable for ``POST /``
    """
    return {
        "author": "Ada Lovelace",
        "alt": "Portrait of Ada Lovelace",
        "tags": "math,analytical engine,poetry",
        "image": "https://upload.wikimedia.org/wikipedia/commons/a/a4/Ada_Lovelace_portrait.jpg",
        "description": "Wrote the first algorithm intended for a machine.",
    }


@pytest.fixture
def view_state() -> GalleryViewState:
    """Create empty view state for testing."""
    return GalleryViewState()
