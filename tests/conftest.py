"""Test fixtures for the embed service."""

from collections.abc import Generator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from ao3_embed.config import Settings
from ao3_embed.domain import WorkMetadata
from ao3_embed.extraction import work_page_extractor
from ao3_embed.presentation.app import create_app
from ao3_embed.presentation.composer import PreviewComposer
from ao3_embed.service import WorkMetadataService
from ao3_embed.storage import WorkCache
from tests.shared.fakes import HOST, ORIGIN, FakeSource, identity
from tests.shared.html import work_page


@pytest.fixture
def settings() -> Settings:
    return Settings(
        host=HOST,
        port=3000,
        origin_url=ORIGIN,
        cache_max_entries=3,
        log_level="DEBUG",
    )


@pytest.fixture
def sample_work() -> WorkMetadata:
    return WorkMetadata(
        id=42,
        title="Example Title",
        author="Jane",
        author_url="/users/Jane/pseuds/Jane",
        published_date="2024-01-01",
        words=12345,
        chapter=3,
        total_chapters=7,
        rating="Teen And Up Audiences",
        language="English",
        kudos=1024,
        hits=20480,
        fandoms=("Fandom A", "Fandom B"),
        warnings=("No Archive Warnings Apply",),
        relationships=("A/B",),
        characters=("Alice", "Bob"),
        tags=("Fluff", "Angst"),
    )


@pytest.fixture
def source() -> FakeSource:
    return FakeSource(pages={42: work_page()})


@pytest.fixture
def cache() -> WorkCache:
    return WorkCache(max_entries=3)


@pytest.fixture
def service(cache: WorkCache, source: FakeSource) -> WorkMetadataService:
    return WorkMetadataService(cache=cache, source=source, extractor=work_page_extractor)


@pytest.fixture
def composer() -> PreviewComposer:
    return PreviewComposer(host=HOST, origin_url=ORIGIN, minifier=identity)


@pytest.fixture
def app(settings: Settings) -> FastAPI:
    return create_app(settings)


@pytest.fixture
def test_client(
    app: FastAPI,
    service: WorkMetadataService,
    composer: PreviewComposer,
) -> Generator[TestClient, None, None]:
    """Client with a fake origin and the real bot classifier.

    Redirects are not followed so tests can inspect them.
    """
    with TestClient(app, follow_redirects=False) as client:
        # Replace what the lifespan built
        app.state.metadata_service = service
        app.state.composer = composer
        yield client
