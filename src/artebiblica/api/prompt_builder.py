"""Style-aware prompt compilation for the image generation service.

The user only describes a biblical scene ("Davi e Golias").  The style they
pick decides how that scene is wrapped before it is sent to the model: a
black-and-white colouring page, a cute kawaii illustration, a realistic
painting, or a minimalist vector piece.

Templates
---------
The wrapping texts are configuration, not code.  They live in
``data/styles.json``::

    {
      "default_style": "coloring",
      "styles": [
        {"id": "coloring", "label": "Página de Colorir", "template": "... \\"{prompt}\\" ..."},
        ...
      ],
      "example_prompts": ["Davi e Golias", ...]
    }

Each template contains a single ``{prompt}`` placeholder that receives the
trimmed user text.  The placeholder is substituted literally, so braces in
user text or templates never trigger format errors.

Usage
-----
::

    compiled = build_prompt("Daniel na cova dos leões", "realistic")
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from pathlib import Path

from artebiblica.core.config import config
from artebiblica.core.errors import ConfigurationError

logger = logging.getLogger(__name__)

PROMPT_PLACEHOLDER = "{prompt}"
STYLES_FILENAME = "styles.json"


class DrawingStyle(str, Enum):
    """Drawing styles offered in the form."""

    COLORING = "coloring"
    CUTE = "cute"
    REALISTIC = "realistic"
    MINIMALIST = "minimalist"


DEFAULT_STYLE = DrawingStyle.COLORING


@dataclass(frozen=True)
class StyleTemplate:
    """One entry of ``styles.json``."""

    id: str
    label: str
    template: str


@dataclass(frozen=True)
class StyleCatalog:
    """All style templates plus the example prompts shown in the form."""

    styles: dict[str, StyleTemplate]
    example_prompts: tuple[str, ...] = ()

    def get(self, style: DrawingStyle) -> StyleTemplate:
        try:
            return self.styles[style.value]
        except KeyError as e:
            raise ConfigurationError(f"No template configured for style '{style.value}'") from e


@lru_cache(maxsize=4)
def load_style_catalog(path: Path | None = None) -> StyleCatalog:
    """Load and validate the style templates from disk.

    Args:
        path: JSON file to read.  Defaults to ``<data_dir>/styles.json``.

    Returns:
        The parsed catalog.  Results are cached per path.

    Raises:
        ConfigurationError: If the file is missing, malformed, or a template
            lacks the ``{prompt}`` placeholder.
    """
    path = path or config.data_dir / STYLES_FILENAME
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigurationError(f"Cannot load style templates from {path}: {e}") from e

    styles: dict[str, StyleTemplate] = {}
    for entry in data.get("styles", []):
        template = StyleTemplate(
            id=entry["id"],
            label=entry.get("label", entry["id"]),
            template=entry["template"],
        )
        if PROMPT_PLACEHOLDER not in template.template:
            raise ConfigurationError(
                f"Template for style '{template.id}' has no {PROMPT_PLACEHOLDER} placeholder"
            )
        styles[template.id] = template

    logger.debug(f"Loaded {len(styles)} style templates from {path}")
    return StyleCatalog(
        styles=styles,
        example_prompts=tuple(data.get("example_prompts", [])),
    )


def resolve_style(style: DrawingStyle | str | None) -> DrawingStyle:
    """Map a style identifier to a :class:`DrawingStyle`.

    Unknown or missing identifiers fall back to the colouring page style.
    """
    if isinstance(style, DrawingStyle):
        return style
    if not style:
        return DEFAULT_STYLE
    try:
        return DrawingStyle(style.strip().lower())
    except ValueError:
        logger.warning(f"Unknown drawing style '{style}', using '{DEFAULT_STYLE.value}'")
        return DEFAULT_STYLE


def list_styles(catalog: StyleCatalog | None = None) -> list[dict[str, str]]:
    """Return ``[{"id": ..., "label": ...}]`` for every style, in form order."""
    catalog = catalog or load_style_catalog()
    return [
        {"id": style.value, "label": catalog.get(style).label}
        for style in DrawingStyle
    ]


def build_prompt(
    user_prompt: str,
    style: DrawingStyle | str | None = DEFAULT_STYLE,
    *,
    catalog: StyleCatalog | None = None,
) -> str:
    """Wrap the user's scene description in the template of ``style``.

    Args:
        user_prompt: Scene, character or passage typed by the user.
        style: Style identifier.  Unknown values fall back to ``coloring``.
        catalog: Templates to use.  Defaults to the bundled ``styles.json``.

    Returns:
        The full prompt sent to the image generation service.
    """
    catalog = catalog or load_style_catalog()
    template = catalog.get(resolve_style(style)).template
    return template.replace(PROMPT_PLACEHOLDER, user_prompt.strip())
