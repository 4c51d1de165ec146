"""FastAPI application factory.

Routes, in matching order:
    /works/{id}[/{path}]   preview page for crawlers, redirect for visitors
    /oembed/...            oEmbed descriptor referenced from the preview page
    anything else          redirect to the same path on the origin
"""

import logging
import sys
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from functools import lru_cache

from fastapi import FastAPI

from ao3_embed import __version__
from ao3_embed.config import Settings, get_settings
from ao3_embed.extraction import work_page_extractor
from ao3_embed.fetching import ArchiveClient
from ao3_embed.presentation.bots import CrawlerDetectClassifier
from ao3_embed.presentation.composer import PreviewComposer
from ao3_embed.presentation.middleware import TrimTrailingSlashMiddleware
from ao3_embed.service import WorkMetadataService
from ao3_embed.storage import WorkCache


@lru_cache(maxsize=1)
def configure_logging(log_level_name: str = "INFO") -> None:
    """Configure logging for the embed service."""
    log_level = getattr(logging, log_level_name.upper(), logging.INFO)

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
    )

    logging.getLogger("ao3_embed").setLevel(log_level)

    # Quiet noisy third-party libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


logger = logging.getLogger(__name__)


def _log_settings(settings: Settings) -> None:
    logger.info("=" * 60)
    logger.info("Embed Service Configuration")
    logger.info("=" * 60)
    logger.info("  Log level: %s", settings.log_level)
    logger.info("  Public host: %s", settings.host)
    logger.info("  Origin: %s", settings.origin_url)
    logger.info("  Cache entries: %d", settings.cache_max_entries)
    logger.info("  Single-flight fetches: %s", settings.single_flight)
    logger.info("  Fetch timeout: %.1fs", settings.fetch_timeout)
    logger.info("=" * 60)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Build the cache and collaborators at startup, close the client at shutdown."""
    settings: Settings = app.state.settings
    _log_settings(settings)

    client = ArchiveClient(
        base_url=settings.origin_url,
        timeout=settings.fetch_timeout,
        user_agent=settings.fetch_user_agent,
    )
    cache = WorkCache(max_entries=settings.cache_max_entries)

    app.state.archive_client = client
    app.state.work_cache = cache
    app.state.metadata_service = WorkMetadataService(
        cache=cache,
        source=client,
        extractor=work_page_extractor,
        single_flight=settings.single_flight,
    )
    app.state.composer = PreviewComposer(
        host=settings.host,
        origin_url=settings.origin_url,
    )
    app.state.bot_classifier = CrawlerDetectClassifier()

    logger.info("Embed service ready")
    yield

    logger.info("Shutting down")
    await client.close()
    del app.state.metadata_service
    del app.state.work_cache
    del app.state.archive_client
    del app.state.composer
    del app.state.bot_classifier


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create FastAPI application."""
    from ao3_embed.presentation.routes import fallback, oembed, works

    if settings is None:
        settings = get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="Work Embed Service",
        description="Link previews for archive works",
        version=__version__,
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.settings = settings

    app.add_middleware(TrimTrailingSlashMiddleware)

    app.include_router(works.router, tags=["works"])
    app.include_router(oembed.router, tags=["oembed"])
    # Must stay last: it matches every path
    app.include_router(fallback.router)

    return app


# For uvicorn
app = create_app()
