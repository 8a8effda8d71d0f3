"""Photo Gallery — FastAPI Application.

This module is the single entry point for the web application.  It defines
the FastAPI ``app`` instance, all REST API routes, and the ``main()`` CLI
function that launches the uvicorn server.

Architecture
------------
- **Configuration** is loaded from ``PHOTOGALLERY_*`` environment variables
  by :mod:`photogallery.core.config`.
- **Persistence** uses a single SQLite table managed by
  :class:`~photogallery.core.gallery_db.GalleryDB`, created (and seeded when
  empty) in the application lifespan.
- **Errors** raised by the store are translated into ``{"error": ...}``
  JSON responses by the exception handlers registered below.
- **The HTML page** and its static assets are served for the browser
  front-end; all data is fetched from ``GET /`` on page load.

Endpoints
---------
========  ==============  ============================================
Method    Path            Purpose
========  ==============  ============================================
POST      ``/``           Create an entry (201, empty body)
GET       ``/``           List all entries
PATCH     ``/``           Update the supplied fields of an entry
DELETE    ``/``           Delete an entry
GET       ``/reset``      Drop, recreate and re-seed the gallery
GET       ``/gallery``    Serve the HTML page
GET       ``/{id}``       Single gallery entry
========  ==============  ============================================

Usage
-----
CLI (installed entry point)::

    photogallery

Direct invocation::

    python -m photogallery.api.main
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Path, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse, Response
from fastapi.staticfiles import StaticFiles

from photogallery import __version__
from photogallery.api.models import (
    MAX_ENTRY_ID,
    EntryCreate,
    EntryDelete,
    EntryUpdate,
    GalleryEntry,
)
from photogallery.core.config import config
from photogallery.core.errors import (
    EntryNotFoundError,
    MissingFieldsError,
    StoreError,
    ValidationError,
)
from photogallery.core.gallery_db import GalleryDB

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Application lifecycle — database setup.
# ---------------------------------------------------------------------------


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application startup and shutdown lifecycle.

    On startup:
        Opens the gallery database at ``config.db_path``, creating the table
        and inserting the seed entries if it is empty, and stores the
        :class:`GalleryDB` on ``app.state``.

    Args:
        app: The FastAPI application instance.

    Yields:
        Control back to the application for the duration of its lifetime.
    """
    # --- Startup -----------------------------------------------------------
    app.state.gallery_db = GalleryDB(config.db_path)
    logger.info("Gallery database ready.")

    yield  # Application runs here.

    # --- Shutdown ----------------------------------------------------------
    logger.info("Gallery server shutting down.")


# ---------------------------------------------------------------------------
# FastAPI application instance.
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Photo Gallery",
    description="Create, list, update, delete and reset photo gallery entries.",
    version=__version__,
    lifespan=lifespan,
)

# The browser page may be opened from a different origin (e.g. a file:// URL
# or another dev server), so CORS is open unless configured otherwise.
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.mount("/static", StaticFiles(directory=str(config.static_dir)), name="static")


# ---------------------------------------------------------------------------
# Error translation.
# ---------------------------------------------------------------------------


@app.exception_handler(MissingFieldsError)
async def missing_fields_handler(request: Request, exc: MissingFieldsError) -> JSONResponse:
    """Return 400 naming exactly the missing fields."""
    return JSONResponse({"error": str(exc), "missing": exc.fields}, status_code=400)


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    return JSONResponse({"error": str(exc)}, status_code=400)


@app.exception_handler(EntryNotFoundError)
async def not_found_handler(request: Request, exc: EntryNotFoundError) -> JSONResponse:
    return JSONResponse({"error": str(exc)}, status_code=404)


@app.exception_handler(StoreError)
async def store_error_handler(request: Request, exc: StoreError) -> JSONResponse:
    return JSONResponse({"error": str(exc)}, status_code=500)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report malformed bodies (bad JSON, wrong value types) as 400."""
    problems = "; ".join(
        f"{'.'.join(str(part) for part in err['loc'] if part != 'body')}: {err['msg']}"
        for err in exc.errors()
    )
    return JSONResponse({"error": f"Error! invalid request: {problems}"}, status_code=400)


def _gallery_db() -> GalleryDB:
    return app.state.gallery_db


# ---------------------------------------------------------------------------
# Routes.
# ---------------------------------------------------------------------------


@app.post("/", status_code=201)
async def create_entry(req: EntryCreate | None = None) -> Response:
    """Insert a new gallery entry.

    All five fields must be present and non-empty; otherwise a ``400``
    response lists the missing ones and nothing is inserted.

    Returns:
        An empty ``201 Created`` response.
    """
    req = req or EntryCreate()
    _gallery_db().create_entry(req.model_dump())
    return Response(status_code=201)


@app.get("/", response_model=list[GalleryEntry])
async def list_entries() -> list[dict]:
    """Return every gallery entry ordered by id."""
    return _gallery_db().list_entries()


@app.patch("/", response_model=GalleryEntry)
async def update_entry(req: EntryUpdate | None = None) -> dict:
    """Update the supplied fields of an entry.

    Only non-empty values among ``author``, ``alt``, ``tags``, ``image`` and
    ``description`` are applied; all other columns keep their values.

    Returns:
        The entry as stored after the update.

    Raises:
        ValidationError: 400 if ``id`` is missing or nothing can be updated.
        EntryNotFoundError: 404 if no entry has this id.
    """
    req = req or EntryUpdate()
    if not req.id:
        raise ValidationError("Error! id must not be empty")

    db = _gallery_db()
    if not db.update_entry(req.id, req.model_dump(exclude={"id"})):
        raise EntryNotFoundError(req.id)

    entry = db.get_entry(req.id)
    if entry is None:
        raise EntryNotFoundError(req.id)
    return entry


@app.delete("/")
async def delete_entry(req: EntryDelete | None = None) -> dict:
    """Delete an entry.

    Returns:
        Dictionary with ``success`` and ``deleted`` keys.

    Raises:
        ValidationError: 400 if ``id`` is missing.
        EntryNotFoundError: 404 if no entry has this id.
    """
    req = req or EntryDelete()
    if not req.id:
        raise ValidationError("Error! id must not be empty")

    if not _gallery_db().delete_entry(req.id):
        raise EntryNotFoundError(req.id)

    return {"success": True, "deleted": req.id}


@app.get("/reset", response_model=list[GalleryEntry])
async def reset_gallery() -> list[dict]:
    """Drop and recreate the gallery, then return the two seed entries."""
    return _gallery_db().reset_all()


@app.get("/gallery", response_class=HTMLResponse)
async def index() -> Response:
    """Serve the gallery HTML page, or 404 if ``index.html`` is not found."""
    index_path = config.templates_dir / "index.html"
    if index_path.exists():
        return HTMLResponse(content=index_path.read_text(encoding="utf-8"))
    return JSONResponse({"error": "index.html not found"}, status_code=404)


@app.get("/{entry_id}", response_model=GalleryEntry)
async def get_entry(entry_id: int = Path(ge=1, le=MAX_ENTRY_ID)) -> dict:
    """Return a single gallery entry.

    Raises:
        EntryNotFoundError: 404 if no entry has this id.
    """
    entry = _gallery_db().get_entry(entry_id)
    if entry is None:
        raise EntryNotFoundError(entry_id)
    return entry


# ---------------------------------------------------------------------------
# CLI entry point.
# ---------------------------------------------------------------------------


def main() -> None:
    """Launch the uvicorn ASGI server.

    Reads host, port and log level from :data:`~photogallery.core.config.config`
    (``PHOTOGALLERY_SERVER_HOST``, ``PHOTOGALLERY_SERVER_PORT``,
    ``PHOTOGALLERY_LOG_LEVEL``).  Defaults to ``0.0.0.0:3000``.

    This function is registered as the ``photogallery`` console script in
    ``pyproject.toml``.
    """
    import uvicorn

    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info(
        f"Open http://localhost:{config.server_port}/gallery in your browser "
        "to see if it works"
    )

    uvicorn.run(
        "photogallery.api.main:app",
        host=config.server_host,
        port=config.server_port,
        reload=False,
    )


if __name__ == "__main__":
    main()
