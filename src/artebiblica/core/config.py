"""Configuration management for Arte Bíblica.

This module provides centralized configuration management using Pydantic Settings.
All configuration is loaded from environment variables with the ARTEBIBLICA_ prefix,
allowing easy customization without code changes.

Environment Variable Loading
-----------------------------
Configuration values are loaded in the following priority order:
1. Environment variables (ARTEBIBLICA_* prefix)
2. .env file in the project root
3. Default values defined in ArteBiblicaConfig

Example .env file:
    ARTEBIBLICA_API_KEY=your-google-ai-studio-key
    ARTEBIBLICA_IMAGE_MODEL=imagen-4.0-generate-001
    ARTEBIBLICA_SERVER_PORT=7860
    ARTEBIBLICA_LOG_LEVEL=DEBUG

Global Configuration Instance
------------------------------
A global `config` instance is created automatically at module import time.
The API key is optional at this point so that the package can be imported
(and tested) without credentials.  The key is enforced when the generation
service is constructed during application startup, see
:class:`~artebiblica.core.generation.ImageGenerationService`.

Usage Example
-------------
    from artebiblica.core.config import config

    print(config.image_model)
    print(config.server_port)

Imagen Constraints
------------------
- The service always requests a single image per call.
- aspect_ratio must be one of the ratios Imagen accepts; 3:4 is the
  portrait ratio closest to A4/A5 paper.
"""

from pathlib import Path
from typing import Literal

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

# Package root (src/artebiblica); bundled assets live next to the code.
_PACKAGE_DIR = Path(__file__).resolve().parent.parent


class ArteBiblicaConfig(BaseSettings):
    """Main configuration for Arte Bíblica.

    Values are loaded from environment variables with the ARTEBIBLICA_ prefix,
    with fallback to defaults defined here.

    Attributes
    ----------
    Image Generation Settings:
        api_key : SecretStr | None
            Google AI API key.  Required to start the server.
        image_model : str
            Imagen model identifier
        aspect_ratio : Literal["1:1", "3:4", "4:3", "9:16", "16:9"]
            Aspect ratio requested from the generation service
        output_mime_type : Literal["image/png", "image/jpeg"]
            Encoding requested from the generation service

    Export Settings:
        jpeg_quality : int
            JPEG quality used by the export pipeline (1-100)

    Paths:
        static_dir : Path
            CSS/JS assets served under /static
        templates_dir : Path
            Directory containing index.html
        data_dir : Path
            Directory containing styles.json

    Server Settings:
        server_host : str
            Server bind address (0.0.0.0 for local network)
        server_port : int
            Server port (1024-65535)
        log_level : Literal["DEBUG", "INFO", "WARNING", "ERROR"]
            Root logging level configured by main()

    Examples
    --------
        >>> custom_config = ArteBiblicaConfig(
        ...     api_key="test-key",
        ...     image_model="imagen-4.0-fast-generate-001",
        ... )
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="ARTEBIBLICA_",
        case_sensitive=False,
        extra="ignore",
    )

    # Image generation settings
    api_key: SecretStr | None = Field(
        default=None,
        description="Google AI API key used by the image generation service",
    )
    image_model: str = Field(
        default="imagen-4.0-generate-001",
        description="Imagen model identifier",
    )
    aspect_ratio: Literal["1:1", "3:4", "4:3", "9:16", "16:9"] = Field(
        default="3:4",
        description="Aspect ratio of generated images (3:4 is close to A4)",
    )
    output_mime_type: Literal["image/png", "image/jpeg"] = Field(
        default="image/png",
        description="Encoding requested from the generation service",
    )

    # Export settings
    jpeg_quality: int = Field(
        default=95,
        description="JPEG quality used when exporting downloads",
        ge=1,
        le=100,
    )

    # Paths
    static_dir: Path = Field(
        default=_PACKAGE_DIR / "static",
        description="Directory of static assets",
    )
    templates_dir: Path = Field(
        default=_PACKAGE_DIR / "templates",
        description="Directory containing index.html",
    )
    data_dir: Path = Field(
        default=_PACKAGE_DIR / "data",
        description="Directory containing styles.json",
    )

    # Server settings
    server_host: str = Field(
        default="0.0.0.0",
        description="Server bind address (0.0.0.0 for local network)",
    )
    server_port: int = Field(
        default=7860,
        description="Server port",
        ge=1024,
        le=65535,
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Logging level",
    )

    def get_api_key(self) -> str | None:
        """Return the plain API key, or None if it is unset or blank."""
        if self.api_key is None:
            return None
        value = self.api_key.get_secret_value().strip()
        return value or None


# Global configuration instance
# Loads values from environment variables (ARTEBIBLICA_* prefix) and .env file.
config = ArteBiblicaConfig()
