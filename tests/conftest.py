"""Shared pytest fixtures for Arte Bíblica tests."""

import io
import shutil
import tempfile
from collections.abc import Callable, Generator
from pathlib import Path
from unittest.mock import MagicMock

import pytest
from PIL import Image

from artebiblica.core.config import ArteBiblicaConfig
from artebiblica.core.generation import ImageGenerationService


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
def test_config() -> ArteBiblicaConfig:
    """Create a configuration that ignores the environment and .env file.

    Returns:
        ArteBiblicaConfig instance with a dummy API key
    """
    return ArteBiblicaConfig(
        _env_file=None,
        api_key="test-key",
        image_model="imagen-test",
    )


@pytest.fixture
def make_image() -> Callable[..., Image.Image]:
    """Factory for in-memory Pillow images.

    Returns:
        Callable ``(width, height, mode="RGBA", color=...)`` returning an image
    """

    def _make(width: int, height: int, mode: str = "RGBA", color=(200, 40, 40, 255)) -> Image.Image:
        if mode == "RGB" and isinstance(color, tuple) and len(color) == 4:
            color = color[:3]
        return Image.new(mode, (width, height), color)

    return _make


@pytest.fixture
def png_bytes(make_image) -> bytes:
    """A small opaque 30x40 PNG, encoded."""
    buffer = io.BytesIO()
    make_image(30, 40).save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def mock_genai_client(png_bytes: bytes) -> MagicMock:
    """A google-genai client double whose generate_images returns ``png_bytes``."""
    generated = MagicMock()
    generated.image.image_bytes = png_bytes

    client = MagicMock()
    client.models.generate_images.return_value = MagicMock(generated_images=[generated])
    return client


@pytest.fixture
def generation_service(test_config, mock_genai_client) -> ImageGenerationService:
    """Generation service wired to the mocked client."""
    return ImageGenerationService(test_config, client=mock_genai_client)


@pytest.fixture
def test_client(monkeypatch, generation_service):
    """FastAPI TestClient with the generation service replaced by the mock.

    Yields:
        ``fastapi.testclient.TestClient`` bound to the application
    """
    from fastapi.testclient import TestClient

    from artebiblica.api import main

    monkeypatch.setattr(main, "create_generation_service", lambda: generation_service)
    with TestClient(main.app) as client:
        yield client
