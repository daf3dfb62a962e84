"""Pydantic request models for the Arte Bíblica API.

These models define the JSON schema for every POST endpoint.  FastAPI uses
them for automatic request validation, serialisation, and OpenAPI
documentation generation.

Models
------
GenerateRequest
    Payload for ``POST /api/generate`` - the prompt and the drawing style.
ExportImageRequest
    Payload for ``POST /api/export`` - the generated image plus the
    download options (format, paper size, base name).
PrintRequest
    Payload for ``POST /api/print`` - the image to print.
ShareRequest
    Payload for ``POST /api/share`` - the prompt and the page URL.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from artebiblica.core.exporter import ExportFormat, PaperSize


class GenerateRequest(BaseModel):
    """Request body for the ``POST /api/generate`` endpoint.

    Attributes:
        prompt: Biblical scene, character or passage to illustrate.  A blank
            prompt is rejected with the inline validation message.
        style: Drawing style identifier (``coloring``, ``cute``,
            ``realistic`` or ``minimalist``).  Unknown values fall back to
            ``coloring``.
    """

    prompt: str = Field(
        default="",
        description="Scene description typed by the user.",
    )
    style: str = Field(
        default="coloring",
        description="Drawing style: 'coloring', 'cute', 'realistic' or 'minimalist'.",
    )


class ExportImageRequest(BaseModel):
    """Request body for the ``POST /api/export`` endpoint.

    Attributes:
        image: The image to export, as a ``data:`` URI or plain base64.
        format: Download encoding, ``png`` or ``jpeg``.
        paper_size: ``original``, ``a4`` or ``a5``.
        base_name: Text the filename is derived from (usually the prompt).
    """

    image: str = Field(
        ...,
        description="Image as a data URI or base64 string.",
    )
    format: ExportFormat = Field(
        default=ExportFormat.PNG,
        description="Download format: 'png' or 'jpeg'.",
    )
    paper_size: PaperSize = Field(
        default=PaperSize.ORIGINAL,
        description="Target size: 'original', 'a4' or 'a5'.",
    )
    base_name: str = Field(
        default="",
        description="Text used to derive the download filename.",
    )


class PrintRequest(BaseModel):
    """Request body for the ``POST /api/print`` endpoint.

    Attributes:
        image: The image to print, as a ``data:`` URI or URL.
    """

    image: str = Field(
        ...,
        min_length=1,
        description="Image as a data URI or URL.",
    )


class ShareRequest(BaseModel):
    """Request body for the ``POST /api/share`` endpoint.

    Attributes:
        prompt: Prompt the image was generated from.
        page_url: URL of the page being shared.
    """

    prompt: str = Field(
        default="",
        description="Prompt the image was generated from.",
    )
    page_url: str = Field(
        ...,
        min_length=1,
        description="URL of the page to share.",
    )
