"""Core functionality for Arte Bíblica.

This module provides the core components of the application:

- **ArteBiblicaConfig / config**: Configuration management using Pydantic Settings
- **Export pipeline**: Rescaling, flattening and encoding of downloads
- **Errors**: The application exception hierarchy

The generation client lives in :mod:`artebiblica.core.generation` and is
imported explicitly where needed, since it depends on the style templates.

Usage Example
-------------
    from artebiblica.core import ExportFormat, ExportRequest, PaperSize, export

    result = await export(
        png_bytes,
        ExportRequest(format=ExportFormat.PNG, paper_size=PaperSize.A5, base_name="Davi e Golias"),
    )
    print(result.filename)  # desenho_biblico_daviegolias.png
"""

from artebiblica.core.config import ArteBiblicaConfig, config
from artebiblica.core.errors import (
    ArteBiblicaError,
    ConfigurationError,
    DecodeError,
    EmptyInputError,
    ExportError,
    GenerationError,
    RenderError,
)
from artebiblica.core.exporter import (
    ExportFormat,
    ExportRequest,
    ExportResult,
    PaperSize,
    SourceImage,
    derive_filename,
    export,
    sanitize_base_name,
    target_dimensions,
)

__all__ = [
    "ArteBiblicaConfig",
    "config",
    "ArteBiblicaError",
    "ConfigurationError",
    "DecodeError",
    "EmptyInputError",
    "ExportError",
    "GenerationError",
    "RenderError",
    "ExportFormat",
    "ExportRequest",
    "ExportResult",
    "PaperSize",
    "SourceImage",
    "derive_filename",
    "export",
    "sanitize_base_name",
    "target_dimensions",
]
