"""Tests for artebiblica.core.generation - the Imagen client wrapper.

All tests use a mocked google-genai client so that no network access
occurs.  Tests cover:

- Startup validation of the API key.
- Request shape (model, styled prompt, one PNG at 3:4).
- Blank prompts never reaching the service.
- Normalisation of upstream failures to GenerationError.
"""

from __future__ import annotations

import base64
from unittest.mock import MagicMock

import pytest

from artebiblica.core.config import ArteBiblicaConfig
from artebiblica.core.errors import ConfigurationError, EmptyInputError, GenerationError
from artebiblica.core.generation import GENERATION_FAILED_MESSAGE, ImageGenerationService


class TestServiceStartup:
    """Test ImageGenerationService construction."""

    def test_missing_api_key_raises(self):
        """Without a key and without a client, startup fails."""
        cfg = ArteBiblicaConfig(_env_file=None, api_key=None)
        with pytest.raises(ConfigurationError, match="ARTEBIBLICA_API_KEY"):
            ImageGenerationService(cfg)

    def test_blank_api_key_raises(self):
        """A whitespace-only key counts as missing."""
        cfg = ArteBiblicaConfig(_env_file=None, api_key="   ")
        with pytest.raises(ConfigurationError):
            ImageGenerationService(cfg)

    def test_injected_client_skips_key_check(self, mock_genai_client):
        """An injected client is used as-is."""
        cfg = ArteBiblicaConfig(_env_file=None, api_key=None)
        service = ImageGenerationService(cfg, client=mock_genai_client)
        assert service.config is cfg


class TestGenerate:
    """Test ImageGenerationService.generate()."""

    def test_returns_image_bytes(self, generation_service, png_bytes):
        """generate() returns the bytes of the first generated image."""
        assert generation_service.generate("Davi e Golias", "cute") == png_bytes

    def test_request_shape(self, generation_service, mock_genai_client, test_config):
        """One PNG at 3:4 is requested from the configured model."""
        generation_service.generate("Davi e Golias", "realistic")

        mock_genai_client.models.generate_images.assert_called_once()
        kwargs = mock_genai_client.models.generate_images.call_args.kwargs
        assert kwargs["model"] == test_config.image_model
        assert '"Davi e Golias"' in kwargs["prompt"]
        assert kwargs["config"].number_of_images == 1
        assert kwargs["config"].output_mime_type == "image/png"
        assert kwargs["config"].aspect_ratio == "3:4"

    def test_style_template_applied(self, generation_service, mock_genai_client):
        """The prompt sent upstream is the styled prompt, not the raw text."""
        generation_service.generate("Arca", "coloring")
        prompt = mock_genai_client.models.generate_images.call_args.kwargs["prompt"]
        assert prompt != "Arca"
        assert "preto e branco" in prompt

    @pytest.mark.parametrize("prompt", ["", "   "])
    def test_blank_prompt_not_sent(self, generation_service, mock_genai_client, prompt):
        """Blank prompts raise EmptyInputError before any network call."""
        with pytest.raises(EmptyInputError):
            generation_service.generate(prompt)
        mock_genai_client.models.generate_images.assert_not_called()

    def test_upstream_failure(self, generation_service, mock_genai_client):
        """SDK exceptions become GenerationError with the generic message."""
        mock_genai_client.models.generate_images.side_effect = RuntimeError("quota exceeded")

        with pytest.raises(GenerationError) as exc_info:
            generation_service.generate("Arca")

        assert str(exc_info.value) == GENERATION_FAILED_MESSAGE
        assert isinstance(exc_info.value.__cause__, RuntimeError)

    def test_no_retry(self, generation_service, mock_genai_client):
        """A failed request is not retried."""
        mock_genai_client.models.generate_images.side_effect = RuntimeError("boom")
        with pytest.raises(GenerationError):
            generation_service.generate("Arca")
        assert mock_genai_client.models.generate_images.call_count == 1

    @pytest.mark.parametrize("generated", [[], None])
    def test_empty_response(self, generation_service, mock_genai_client, generated):
        """A response without images is a GenerationError."""
        mock_genai_client.models.generate_images.return_value = MagicMock(generated_images=generated)
        with pytest.raises(GenerationError):
            generation_service.generate("Arca")

    def test_data_uri(self, generation_service, png_bytes):
        """generate_data_uri() wraps the bytes in a PNG data URI."""
        uri = generation_service.generate_data_uri("Arca")
        prefix = "data:image/png;base64,"
        assert uri.startswith(prefix)
        assert base64.b64decode(uri[len(prefix):]) == png_bytes
