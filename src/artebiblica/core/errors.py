"""Exception hierarchy for Arte Bíblica.

Every error carries a message that is safe to show to the user.  Technical
details are logged where the error is raised and chained via ``from``.

Hierarchy::

    ArteBiblicaError
    ├── ConfigurationError   missing or invalid startup configuration
    ├── EmptyInputError      blank prompt, shown inline
    ├── GenerationError      upstream image service failure
    └── ExportError
        ├── DecodeError      source image cannot be read
        └── RenderError      drawing surface cannot be allocated
"""


class ArteBiblicaError(Exception):
    """Base class for all application errors."""

    pass


class ConfigurationError(ArteBiblicaError):
    """Raised at startup when required configuration is missing."""

    pass


class EmptyInputError(ArteBiblicaError):
    """Raised when the user submits a blank prompt."""

    pass


class GenerationError(ArteBiblicaError):
    """Raised when the image generation service fails or returns nothing."""

    pass


class ExportError(ArteBiblicaError):
    """Base class for export pipeline failures."""

    pass


class DecodeError(ExportError):
    """Raised when the source image cannot be decoded."""

    pass


class RenderError(ExportError):
    """Raised when the off-screen drawing surface cannot be allocated."""

    pass
