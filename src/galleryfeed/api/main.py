"""Gallery Feed — FastAPI Application.

This module is the single entry point for the web service.  It defines the
application factory, the default ``app`` instance, the listing routes, and the
``main()`` CLI function that launches the uvicorn server.

Architecture
------------
The service is stateless:

- **Configuration** comes from :mod:`galleryfeed.core.config`.
  :func:`create_app` binds an application to any config instance, which is how
  tests point the service at temporary directories.
- **Listing** is performed by :func:`galleryfeed.core.scanner.list_images` on
  every request.  Nothing is cached, so images dropped into the gallery
  directory appear on the next request.
- **Image files** are served by a ``StaticFiles`` subclass under ``/gallery`` so
  that each ``src`` in the listing resolves to ``/gallery/<src>``.  Only paths
  the listing could return are served; other files in the gallery directory
  (notes, scripts, nested folders) answer 404.

Endpoints
---------
========  ============================  ====================================
Method    Path                          Purpose
========  ============================  ====================================
any       ``/api/images``               Shuffled JSON image listing
any       ``/list-images.php``          Same listing at the legacy path
GET       ``/gallery/{path}``           Image files from the gallery
========  ============================  ====================================

Usage
-----
CLI (installed entry point)::

    galleryfeed

Direct invocation::

    python -m galleryfeed.api.main
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Iterable
from contextlib import asynccontextmanager
from pathlib import Path, PurePath

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException
from starlette.responses import Response
from starlette.types import Scope

from galleryfeed import __version__
from galleryfeed.core.config import GalleryFeedConfig, config
from galleryfeed.core.models import ImageEntry
from galleryfeed.core.scanner import FEATURED_SUBDIR, is_image_name, list_images

logger = logging.getLogger(__name__)

# The listing never inspects the request, so every common method is accepted.
LISTING_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE"]


class GalleryFiles(StaticFiles):
    """Static files limited to what the image listing can return.

    A path is served only if it names an image directly in the gallery
    directory or directly in its ``featured/`` subdirectory.  Anything else
    answers 404 even when the file exists.
    """

    def __init__(self, *, directory: str | Path, extensions: Iterable[str]) -> None:
        super().__init__(directory=directory)
        self.extensions = frozenset(ext.lower() for ext in extensions)

    def is_listed(self, path: str) -> bool:
        parts = PurePath(path).parts
        if len(parts) == 2 and parts[0] == FEATURED_SUBDIR:
            return is_image_name(parts[1], self.extensions)
        return len(parts) == 1 and is_image_name(parts[0], self.extensions)

    async def get_response(self, path: str, scope: Scope) -> Response:
        if not self.is_listed(path):
            raise HTTPException(status_code=404)
        return await super().get_response(path, scope)


def create_app(cfg: GalleryFeedConfig) -> FastAPI:
    """Build a FastAPI application serving the gallery described by *cfg*.

    Args:
        cfg: Configuration providing the gallery directory and the
            recognized image extensions.

    Returns:
        A ready-to-serve FastAPI application.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info(
            f"Serving gallery from {cfg.gallery_dir.resolve()} "
            f"(featured: {(cfg.gallery_dir / FEATURED_SUBDIR).resolve()})"
        )
        yield

    app = FastAPI(
        title="Gallery Feed",
        description="Shuffled JSON listing of regular and featured gallery images.",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.config = cfg

    # The gallery page may be served from a different origin.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    def get_images() -> list[ImageEntry]:
        """Return every regular and featured image in random order.

        Missing or unreadable directories contribute no entries, so the
        response is always a JSON array, possibly empty.

        Returns:
            Shuffled list of ``{"src": ..., "type": ...}`` entries.
        """
        images = list_images(cfg.gallery_dir, extensions=cfg.image_extensions)
        logger.debug(f"Listed {len(images)} gallery images")
        return images

    for path in ("/api/images", "/list-images.php"):
        app.add_api_route(
            path,
            get_images,
            methods=["GET"],
            response_model=list[ImageEntry],
        )
        # Kept out of the schema; one operation per route keeps OpenAPI ids unique.
        app.add_api_route(
            path,
            get_images,
            methods=[m for m in LISTING_METHODS if m != "GET"],
            response_model=list[ImageEntry],
            include_in_schema=False,
        )

    # StaticFiles fails at request time when its directory is missing, so only
    # mount it when there is something to serve.
    if cfg.gallery_dir.is_dir():
        app.mount(
            "/gallery",
            GalleryFiles(directory=cfg.gallery_dir, extensions=cfg.image_extensions),
            name="gallery",
        )
    else:
        logger.warning(f"Gallery directory {cfg.gallery_dir} not found; /gallery not mounted")

    return app


# Default application instance bound to the global configuration.
app = create_app(config)


def main() -> None:
    """Launch the uvicorn ASGI server.

    Reads host, port, and log level from :data:`~galleryfeed.core.config.config`
    (``GALLERYFEED_SERVER_HOST``, ``GALLERYFEED_SERVER_PORT``,
    ``GALLERYFEED_LOG_LEVEL``).  Defaults to ``0.0.0.0:8000``.

    This function is registered as the ``galleryfeed`` console script in
    ``pyproject.toml``.
    """
    import uvicorn

    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    uvicorn.run(
        "galleryfeed.api.main:app",
        host=config.server_host,
        port=config.server_port,
        reload=False,
    )


if __name__ == "__main__":
    main()
