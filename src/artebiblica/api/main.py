"""Arte Bíblica - FastAPI Application.

This module is the single entry point for the web application.  It defines
the FastAPI ``app`` instance, all REST API routes, and the ``main()`` CLI
function that launches the uvicorn server.

Architecture
------------
The application is stateless between requests:

- **Style templates** are loaded from ``styles.json`` and served to the
  frontend via ``GET /api/config``.
- **Image generation** is performed by
  :class:`~artebiblica.core.generation.ImageGenerationService`, created once
  at startup.  Startup fails if no API key is configured.
- **Form transitions** go through :mod:`artebiblica.ui.state`; the generate
  endpoint returns the rendered view model.
- **Downloads** run the export pipeline (:mod:`artebiblica.core.exporter`) on
  the image the browser sends back.  Nothing is stored server-side, so each
  download decodes the image again.
- **Static assets** (CSS, JS) are served by FastAPI's ``StaticFiles``.

Endpoints
---------
========  ==================  ==========================================
Method    Path                Purpose
========  ==================  ==========================================
GET       ``/``               Serve the main HTML page
GET       ``/health``         Liveness check
GET       ``/api/config``     Styles, examples, download options
POST      ``/api/generate``   Generate an illustration
POST      ``/api/export``     Download in PNG/JPEG at original/A4/A5
POST      ``/api/print``      Printable A4 page for an image
POST      ``/api/share``      Share text and social links
========  ==================  ==========================================

Usage
-----
CLI (installed entry point)::

    artebiblica

Direct invocation::

    python -m artebiblica.api.main
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, Response
from fastapi.staticfiles import StaticFiles

from artebiblica import __version__
from artebiblica.api.models import ExportImageRequest, GenerateRequest, PrintRequest, ShareRequest
from artebiblica.api.prompt_builder import DEFAULT_STYLE, list_styles, load_style_catalog
from artebiblica.core.config import config
from artebiblica.core.errors import DecodeError, EmptyInputError, GenerationError, RenderError
from artebiblica.core.exporter import ExportFormat, ExportRequest, PaperSize, export
from artebiblica.core.generation import GENERATION_FAILED_MESSAGE, ImageGenerationService
from artebiblica.ui.print_page import build_print_page
from artebiblica.ui.share import build_share_links, build_share_text
from artebiblica.ui.state import (
    FormState,
    GenerationFailed,
    GenerationSucceeded,
    PromptChanged,
    StyleChanged,
    Submit,
    reduce,
    render,
    should_generate,
)
from artebiblica.ui.validation import ValidationError

logger = logging.getLogger(__name__)

STATIC_DIR: Path = config.static_dir
TEMPLATES_DIR: Path = config.templates_dir


def create_generation_service() -> ImageGenerationService:
    """Build the generation service from the global configuration.

    Raises:
        ConfigurationError: If ``ARTEBIBLICA_API_KEY`` is not set.
    """
    return ImageGenerationService(config)


# ---------------------------------------------------------------------------
# Application lifecycle.
# ---------------------------------------------------------------------------


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application startup and shutdown lifecycle.

    On startup:
        Creates the :class:`ImageGenerationService` and stores it on
        ``app.state``.  A missing API key aborts startup here rather than
        surfacing on the first request.

    Args:
        app: The FastAPI application instance.

    Yields:
        Control back to the application for the duration of its lifetime.
    """
    app.state.generation_service = create_generation_service()
    logger.info("Image generation service initialised.")

    yield

    app.state.generation_service = None
    logger.info("Image generation service released on shutdown.")


app = FastAPI(
    title="Arte Bíblica",
    description="AI illustrations of biblical scenes, ready to download, print and share.",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")


# ---------------------------------------------------------------------------
# Routes.
# ---------------------------------------------------------------------------


@app.get("/", response_class=HTMLResponse)
async def index() -> HTMLResponse:
    """Serve the main application HTML page.

    All dynamic data (styles, example prompts, download options) is fetched
    by the frontend via ``GET /api/config`` on page load.

    Raises:
        HTTPException: 404 if ``index.html`` is not found.
    """
    index_path = TEMPLATES_DIR / "index.html"
    if index_path.exists():
        return HTMLResponse(content=index_path.read_text(encoding="utf-8"))
    raise HTTPException(status_code=404, detail="index.html not found")


@app.get("/health")
async def health() -> dict:
    """Liveness check."""
    return {"status": "ok", "version": __version__}


@app.get("/api/config")
async def get_config() -> dict:
    """Return the form configuration for the frontend.

    Returns:
        Dictionary with keys ``version``, ``styles``, ``default_style``,
        ``example_prompts``, ``formats``, ``paper_sizes``, the generic
        ``generation_failed_message`` and the initial rendered ``state``.
    """
    catalog = load_style_catalog()
    return {
        "version": __version__,
        "styles": list_styles(catalog),
        "default_style": DEFAULT_STYLE.value,
        "example_prompts": list(catalog.example_prompts),
        "formats": [fmt.value for fmt in ExportFormat],
        "paper_sizes": [size.value for size in PaperSize],
        "generation_failed_message": GENERATION_FAILED_MESSAGE,
        "state": render(FormState()),
    }


@app.post("/api/generate")
async def generate_image(req: GenerateRequest) -> dict:
    """Generate one illustration for the submitted prompt and style.

    This endpoint:

    1. Feeds the prompt, style and submission through the form reducer.
    2. Returns 400 with the inline message if the prompt is blank; the
       generation service is not called.
    3. Calls the generation service in a worker thread.
    4. Returns the rendered form state with the image as a ``data:`` URI.

    Args:
        req: Validated :class:`GenerateRequest` payload.

    Returns:
        The view model from :func:`artebiblica.ui.state.render`.

    Raises:
        HTTPException: 400 for a blank or invalid prompt, 502 if the
            generation service fails.
    """
    state = FormState()
    for event in (PromptChanged(req.prompt), StyleChanged(req.style), Submit()):
        state = reduce(state, event)

    if not should_generate(state):
        raise HTTPException(status_code=400, detail=state.error)

    service: ImageGenerationService = app.state.generation_service
    try:
        image_uri = await asyncio.to_thread(service.generate_data_uri, state.prompt, state.style)
    except (EmptyInputError, ValidationError) as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    except GenerationError as e:
        state = reduce(state, GenerationFailed(str(e)))
        raise HTTPException(status_code=502, detail=state.error) from e

    state = reduce(state, GenerationSucceeded(image_uri))
    return render(state)


@app.post("/api/export")
async def export_image(req: ExportImageRequest) -> Response:
    """Export an image as a download.

    The image is decoded, rescaled to the requested paper width, flattened
    onto white for JPEG, and encoded.  The response carries a
    ``Content-Disposition`` header with the derived filename.

    Args:
        req: Validated :class:`ExportImageRequest` payload.

    Returns:
        The encoded image.

    Raises:
        HTTPException: 422 if the image cannot be decoded, 500 if it cannot
            be rendered.
    """
    request = ExportRequest(
        format=req.format,
        paper_size=req.paper_size,
        base_name=req.base_name,
        jpeg_quality=config.jpeg_quality,
    )
    try:
        result = await export(req.image, request)
    except DecodeError as e:
        logger.error(f"Export failed, source not decodable: {e}")
        raise HTTPException(status_code=422, detail=str(e)) from e
    except RenderError as e:
        logger.error(f"Export failed while rendering: {e}")
        raise HTTPException(status_code=500, detail=str(e)) from e

    return Response(
        content=result.data,
        media_type=result.media_type,
        headers={"Content-Disposition": f'attachment; filename="{result.filename}"'},
    )


@app.post("/api/print", response_class=HTMLResponse)
async def print_page(req: PrintRequest) -> HTMLResponse:
    """Return a self-printing A4 page for the given image."""
    return HTMLResponse(content=build_print_page(req.image))


@app.post("/api/share")
async def share_links(req: ShareRequest) -> dict:
    """Return the share text and the Twitter, Facebook and WhatsApp links.

    Args:
        req: Validated :class:`ShareRequest` payload.

    Returns:
        Dictionary with ``text`` and ``links``.
    """
    return {
        "text": build_share_text(req.prompt),
        "links": build_share_links(req.prompt, req.page_url).to_dict(),
    }


# ---------------------------------------------------------------------------
# CLI entry point.
# ---------------------------------------------------------------------------


def main() -> None:
    """Launch the uvicorn ASGI server.

    Reads host, port and log level from :data:`~artebiblica.core.config.config`
    (``ARTEBIBLICA_SERVER_HOST``, ``ARTEBIBLICA_SERVER_PORT``,
    ``ARTEBIBLICA_LOG_LEVEL``).  Defaults to ``0.0.0.0:7860``.

    This function is registered as the ``artebiblica`` console script in
    ``pyproject.toml``.
    """
    import uvicorn

    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    uvicorn.run(
        "artebiblica.api.main:app",
        host=config.server_host,
        port=config.server_port,
        reload=False,
    )


if __name__ == "__main__":
    main()
