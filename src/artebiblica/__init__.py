"""Arte Bíblica - AI illustrations of biblical scenes, ready to print."""

__version__ = "0.1.0"

from artebiblica.core.config import ArteBiblicaConfig, config
from artebiblica.core.exporter import ExportFormat, ExportRequest, ExportResult, PaperSize, export

__all__ = [
    "ArteBiblicaConfig",
    "config",
    "ExportFormat",
    "ExportRequest",
    "ExportResult",
    "PaperSize",
    "export",
]
