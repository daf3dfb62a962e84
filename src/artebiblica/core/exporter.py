"""Download export pipeline for generated illustrations.

This module turns a generated image into a downloadable file: it rescales
the image to a print paper width, flattens it for JPEG, encodes it, and
derives a safe filename from the user's prompt.

Pipeline
--------
1. **Decode** the source (bytes, base64 text or ``data:`` URI) into a
   :class:`SourceImage`.  Decoding runs in a worker thread; :func:`export`
   awaits it before any pixel work starts.
2. **Size** the target surface.  ``ORIGINAL`` keeps the source dimensions,
   ``A4`` and ``A5`` use the 300 DPI portrait width of the paper and derive
   the height from the source aspect ratio.  Targets larger than Pillow's
   ``MAX_IMAGE_PIXELS`` are refused before anything is allocated.
3. **Draw** the scaled source onto a freshly allocated surface.  JPEG has no
   alpha channel, so the surface is filled with white first and the source
   is pasted through its own alpha mask.  PNG keeps transparency.
4. **Encode** to PNG (lossless) or JPEG (quality 95).
5. **Name** the file ``desenho_biblico_<name>.<ext>``.

Steps 3 and 4 also run in a worker thread.  Every call decodes and
allocates its own surface; nothing is cached or shared between exports.

Usage
-----
::

    from artebiblica.core.exporter import ExportFormat, ExportRequest, PaperSize, export

    result = await export(
        data_uri,
        ExportRequest(
            format=ExportFormat.JPEG,
            paper_size=PaperSize.A4,
            base_name="A Arca de Noé",
        ),
    )
    Path(result.filename).write_bytes(result.data)
"""

from __future__ import annotations

import asyncio
import base64
import binascii
import io
import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Union

from PIL import Image, UnidentifiedImageError

from artebiblica.core.errors import DecodeError, RenderError

logger = logging.getLogger(__name__)

# Filename derivation.
FILENAME_PREFIX = "desenho_biblico_"
FALLBACK_NAME = "arte"
MAX_NAME_LENGTH = 30
_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9]")

DEFAULT_JPEG_QUALITY = 95

# Single-channel modes whose samples do not fit in 8 bits.
_WIDE_SAMPLE_MODES = frozenset({"I;16", "I;16L", "I;16B", "I;16N", "I", "F"})
_SIXTEEN_BIT_MAX = 65535


class ExportFormat(str, Enum):
    """Encodings offered for download."""

    PNG = "png"
    JPEG = "jpeg"

    @property
    def extension(self) -> str:
        return self.value

    @property
    def media_type(self) -> str:
        return f"image/{self.value}"

    @property
    def pil_format(self) -> str:
        return self.value.upper()


class PaperSize(str, Enum):
    """Print targets for downloads."""

    ORIGINAL = "original"
    A4 = "a4"
    A5 = "a5"


# Portrait widths at 300 DPI (210 mm and 148 mm).
PAPER_WIDTHS: dict[PaperSize, int] = {
    PaperSize.A4: 2480,
    PaperSize.A5: 1748,
}


@dataclass(frozen=True)
class SourceImage:
    """A decoded raster ready for export.

    Attributes:
        image: The decoded Pillow image.  It is read, never modified.
    """

    image: Image.Image

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise DecodeError(f"Source image has no pixels ({self.width}x{self.height})")

    @property
    def width(self) -> int:
        return self.image.width

    @property
    def height(self) -> int:
        return self.image.height


@dataclass(frozen=True)
class ExportRequest:
    """What the user picked in the download menu.

    Attributes:
        format: Output encoding.
        paper_size: Target paper, or ``ORIGINAL`` to keep the source size.
        base_name: Free text the filename is derived from (usually the prompt).
        jpeg_quality: Quality factor for JPEG output (ignored for PNG).
    """

    format: ExportFormat = ExportFormat.PNG
    paper_size: PaperSize = PaperSize.ORIGINAL
    base_name: str = ""
    jpeg_quality: int = DEFAULT_JPEG_QUALITY


@dataclass(frozen=True)
class ExportResult:
    """An encoded download.

    Attributes:
        data: Encoded image bytes.
        filename: Suggested download filename.
        media_type: MIME type matching ``data``.
        width: Width of the encoded image in pixels.
        height: Height of the encoded image in pixels.
    """

    data: bytes
    filename: str
    media_type: str
    width: int
    height: int

    @property
    def data_uri(self) -> str:
        """The encoded image as a ``data:`` URI."""
        encoded = base64.b64encode(self.data).decode("ascii")
        return f"data:{self.media_type};base64,{encoded}"


SourcePayload = Union[SourceImage, Image.Image, bytes, bytearray, str]


# ---------------------------------------------------------------------------
# Filename derivation.
# ---------------------------------------------------------------------------


def sanitize_base_name(text: str) -> str:
    """Reduce free text to a short, filesystem-safe name.

    Drops every character that is not an ASCII letter or digit (spaces,
    punctuation and accented letters included), lowercases the rest and
    keeps the first 30 characters.  Applying it twice gives the same result
    as applying it once.

    Args:
        text: Arbitrary user text.

    Returns:
        The sanitized name, possibly empty.
    """
    return _UNSAFE_CHARS.sub("", text).lower()[:MAX_NAME_LENGTH]


def derive_filename(base_name: str, fmt: ExportFormat) -> str:
    """Build the download filename for ``base_name`` in format ``fmt``.

    Examples:
        >>> derive_filename("A Arca de Noé!", ExportFormat.PNG)
        'desenho_biblico_aarcadeno.png'
        >>> derive_filename("???", ExportFormat.JPEG)
        'desenho_biblico_arte.jpeg'
    """
    name = sanitize_base_name(base_name) or FALLBACK_NAME
    return f"{FILENAME_PREFIX}{name}.{fmt.extension}"


# ---------------------------------------------------------------------------
# Geometry.
# ---------------------------------------------------------------------------


def target_dimensions(width: int, height: int, paper_size: PaperSize) -> tuple[int, int]:
    """Compute the output size for a source of ``width`` x ``height``.

    The height always follows from the width and the source aspect ratio,
    rounded half-up to whole pixels.

    Args:
        width: Source width in pixels (> 0).
        height: Source height in pixels (> 0).
        paper_size: Requested paper target.

    Returns:
        ``(target_width, target_height)``.

    Raises:
        ValueError: If either source dimension is not positive.
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Image dimensions must be positive, got {width}x{height}")

    if paper_size is PaperSize.ORIGINAL:
        return width, height

    target_width = PAPER_WIDTHS[paper_size]
    target_height = int(target_width * (height / width) + 0.5)
    return target_width, max(1, target_height)


def _check_surface_size(width: int, height: int) -> None:
    limit = Image.MAX_IMAGE_PIXELS
    if limit is not None and width * height > limit:
        logger.error(f"Refusing {width}x{height} drawing surface, limit is {limit} pixels")
        raise RenderError(f"A {width}x{height} image is too large to export")


# ---------------------------------------------------------------------------
# Decoding.
# ---------------------------------------------------------------------------


def _text_to_bytes(payload: str) -> bytes:
    """Decode a base64 string or ``data:`` URI into raw bytes.

    The ``data:`` scheme and the ``;base64`` marker match case-insensitively,
    and whitespace inside the base64 body (line breaks from MIME wrapping)
    is ignored.
    """
    text = payload.strip()
    if text[:5].lower() == "data:":
        header, sep, text = text.partition(",")
        if not sep or not header.lower().endswith(";base64"):
            raise DecodeError("Only base64 data URIs are supported")

    text = "".join(text.split())
    try:
        return base64.b64decode(text, validate=True)
    except (binascii.Error, ValueError) as e:
        raise DecodeError("Source image is not valid base64") from e


def decode_source_image(payload: SourcePayload) -> SourceImage:
    """Decode ``payload`` into a fully loaded :class:`SourceImage`.

    Args:
        payload: A ``SourceImage``, a Pillow image, encoded image bytes, a
            base64 string or a ``data:image/...;base64,`` URI.

    Returns:
        The decoded source image.

    Raises:
        DecodeError: If the payload is empty, not base64, or not an image
            Pillow can read.
    """
    if isinstance(payload, SourceImage):
        return payload
    if isinstance(payload, Image.Image):
        return SourceImage(payload)

    raw = _text_to_bytes(payload) if isinstance(payload, str) else bytes(payload)
    if not raw:
        raise DecodeError("Source image is empty")

    try:
        image = Image.open(io.BytesIO(raw))
        # Force the full decode now so truncated data fails here, not mid-render.
        image.load()
    # Pillow reports some corrupt PNG chunks as SyntaxError.
    except (
        UnidentifiedImageError,
        Image.DecompressionBombError,
        OSError,
        SyntaxError,
        ValueError,
    ) as e:
        logger.error(f"Failed to decode source image: {e}")
        raise DecodeError("Could not read the source image") from e

    return SourceImage(image)


async def load_source_image(payload: SourcePayload) -> SourceImage:
    """Decode ``payload`` without blocking the event loop.

    Already decoded images are returned as-is.
    """
    if isinstance(payload, SourceImage):
        return payload
    return await asyncio.to_thread(decode_source_image, payload)


# ---------------------------------------------------------------------------
# Rendering.
# ---------------------------------------------------------------------------


def _to_rgba(image: Image.Image) -> Image.Image:
    """Convert ``image`` to RGBA, scaling wide samples down to 8 bits.

    16-bit modes map their full range onto 0-255.  ``I`` and ``F`` images
    whose values all fit in 0-255 are kept as they are; anything larger is
    treated as 16-bit, or stretched by its maximum when it exceeds 16 bits.
    """
    if image.mode not in _WIDE_SAMPLE_MODES:
        return image.convert("RGBA")

    if image.mode.startswith("I;16"):
        image = image.convert("I")
        high = _SIXTEEN_BIT_MAX
    else:
        _, high = image.getextrema()

    if high > 255:
        scale = 255 / max(high, _SIXTEEN_BIT_MAX)
        image = image.point(lambda v: v * scale)
    return image.convert("L").convert("RGBA")


def render_export(source: SourceImage, request: ExportRequest) -> ExportResult:
    """Scale, flatten and encode ``source`` according to ``request``.

    Args:
        source: The decoded source image.
        request: Format, paper size and base name.

    Returns:
        The encoded download.

    Raises:
        RenderError: If the target is larger than ``Image.MAX_IMAGE_PIXELS``
            or the drawing surface cannot be allocated or encoded.
    """
    width, height = target_dimensions(source.width, source.height, request.paper_size)
    _check_surface_size(width, height)

    try:
        scaled = _to_rgba(source.image)
        if scaled.size != (width, height):
            scaled = scaled.resize((width, height), Image.Resampling.LANCZOS)

        if request.format is ExportFormat.JPEG:
            # No alpha in JPEG: transparent areas must come out white, not black.
            surface = Image.new("RGB", (width, height), (255, 255, 255))
            surface.paste(scaled.convert("RGB"), (0, 0), scaled.getchannel("A"))
        else:
            surface = Image.new("RGBA", (width, height), (0, 0, 0, 0))
            surface.paste(scaled, (0, 0))
    except (MemoryError, ValueError, Image.DecompressionBombError) as e:
        logger.error(f"Failed to allocate {width}x{height} drawing surface: {e}")
        raise RenderError(f"Could not prepare a {width}x{height} image") from e

    buffer = io.BytesIO()
    save_kwargs = {"quality": request.jpeg_quality} if request.format is ExportFormat.JPEG else {}
    try:
        surface.save(buffer, format=request.format.pil_format, **save_kwargs)
    except (MemoryError, OSError, ValueError) as e:
        logger.error(f"Failed to encode {request.format.value} export: {e}")
        raise RenderError(f"Could not encode the image as {request.format.value}") from e

    return ExportResult(
        data=buffer.getvalue(),
        filename=derive_filename(request.base_name, request.format),
        media_type=request.format.media_type,
        width=width,
        height=height,
    )


async def export(source: SourcePayload, request: ExportRequest) -> ExportResult:
    """Export ``source`` as a downloadable file.

    Waits for the source to be fully decoded, then renders it in a worker
    thread so the event loop keeps serving other requests.  There is no
    cancellation and no timeout.

    Args:
        source: Anything :func:`decode_source_image` accepts.
        request: Format, paper size and base name.

    Returns:
        The encoded download.

    Raises:
        DecodeError: If the source image cannot be read.
        RenderError: If the target is too large or the drawing surface
            cannot be allocated.
    """
    source_image = await load_source_image(source)
    result = await asyncio.to_thread(render_export, source_image, request)
    logger.info(
        f"Exported {result.filename} ({result.width}x{result.height}, "
        f"{request.paper_size.value}, {len(result.data)} bytes)"
    )
    return result
