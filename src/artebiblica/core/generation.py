"""Text-to-image client for the Arte Bíblica generator.

This module provides :class:`ImageGenerationService`, the single point of
contact with Google's Imagen models through the ``google-genai`` SDK.

Key Responsibilities
--------------------
- **Startup validation** - the service refuses to start without an API key,
  so a misconfigured deployment fails immediately instead of on the first
  user request.
- **Prompt styling** - the user's scene is wrapped in the template of the
  selected drawing style (see :mod:`artebiblica.api.prompt_builder`).
- **Fixed request shape** - one image, PNG, 3:4 portrait aspect ratio
  (configurable through :class:`ArteBiblicaConfig`).
- **Error normalisation** - every upstream failure becomes a
  :class:`GenerationError` with a generic, user-facing message.  The original
  exception is logged and chained.  Nothing is retried.

Usage
-----
::

    from artebiblica.core.config import config
    from artebiblica.core.generation import ImageGenerationService

    service = ImageGenerationService(config)
    png_bytes = service.generate("Davi e Golias", "cute")
    data_uri = service.generate_data_uri("Davi e Golias", "cute")

See Also
--------
- :mod:`artebiblica.api.main` - creates the service in the app lifespan.
"""

from __future__ import annotations

import base64
import logging
from typing import Any

from artebiblica.api.prompt_builder import DEFAULT_STYLE, DrawingStyle, build_prompt, resolve_style
from artebiblica.core.config import ArteBiblicaConfig
from artebiblica.core.errors import ConfigurationError, GenerationError
from artebiblica.ui.validation import validate_prompt

logger = logging.getLogger(__name__)

GENERATION_FAILED_MESSAGE = "Ocorreu um erro ao gerar a imagem. Por favor, tente novamente."


class ImageGenerationService:
    """Generate illustrations with an Imagen model.

    Args:
        config: Application configuration (model, aspect ratio, API key).
        client: Pre-built ``google.genai.Client``.  When omitted, one is
            created from ``config.api_key``.

    Raises:
        ConfigurationError: If no client is given and no API key is set.
    """

    def __init__(self, config: ArteBiblicaConfig, client: Any | None = None) -> None:
        self.config = config
        self._client = client if client is not None else self._create_client(config)
        logger.info(f"ImageGenerationService ready (model={config.image_model})")

    @staticmethod
    def _create_client(config: ArteBiblicaConfig) -> Any:
        api_key = config.get_api_key()
        if api_key is None:
            raise ConfigurationError(
                "ARTEBIBLICA_API_KEY is not set; the image generation service cannot start"
            )

        # Imported lazily so the rest of the package works without the SDK configured.
        from google import genai

        return genai.Client(api_key=api_key)

    def _build_request_config(self) -> Any:
        from google.genai import types

        return types.GenerateImagesConfig(
            number_of_images=1,
            output_mime_type=self.config.output_mime_type,
            aspect_ratio=self.config.aspect_ratio,
        )

    def generate(self, prompt: str, style: DrawingStyle | str | None = DEFAULT_STYLE) -> bytes:
        """Generate one image for ``prompt`` in ``style``.

        Args:
            prompt: Scene description typed by the user.
            style: Drawing style identifier.  Unknown values fall back to
                ``coloring``.

        Returns:
            The encoded image bytes (PNG by default).

        Raises:
            EmptyInputError: If ``prompt`` is blank.  No request is sent.
            GenerationError: If the service fails or returns no image.
        """
        user_prompt = validate_prompt(prompt)
        drawing_style = resolve_style(style)
        full_prompt = build_prompt(user_prompt, drawing_style)

        logger.info(f"Generating image (style={drawing_style.value}, prompt={user_prompt!r})")
        try:
            response = self._client.models.generate_images(
                model=self.config.image_model,
                prompt=full_prompt,
                config=self._build_request_config(),
            )
        except Exception as e:
            logger.error(f"Image generation request failed: {e}", exc_info=True)
            raise GenerationError(GENERATION_FAILED_MESSAGE) from e

        generated = getattr(response, "generated_images", None) or []
        image_bytes = generated[0].image.image_bytes if generated and generated[0].image else None
        if not image_bytes:
            logger.error("Image generation returned no images")
            raise GenerationError(GENERATION_FAILED_MESSAGE)

        logger.info(f"Image generated ({len(image_bytes)} bytes)")
        return image_bytes

    def generate_data_uri(
        self, prompt: str, style: DrawingStyle | str | None = DEFAULT_STYLE
    ) -> str:
        """Like :meth:`generate`, but return a ``data:`` URI for the browser."""
        image_bytes = self.generate(prompt, style)
        encoded = base64.b64encode(image_bytes).decode("ascii")
        return f"data:{self.config.output_mime_type};base64,{encoded}"
