"""Cache-backed access to work metadata."""

from __future__ import annotations

import asyncio
import logging
from functools import partial

from ao3_embed.domain import WorkMetadata
from ao3_embed.extraction import ExtractionStrategy, parse_document
from ao3_embed.fetching import WorkSource
from ao3_embed.storage import WorkCache

logger = logging.getLogger(__name__)


class WorkMetadataService:
    """Serves ``WorkMetadata`` from the cache, fetching and extracting on a miss.

    Only successful extractions are cached; failures propagate as
    ``EmbedError`` and the next request retries from scratch.

    By default concurrent misses for the same id each fetch independently
    and the last write wins. With ``single_flight`` enabled they share one
    in-flight fetch instead.
    """

    def __init__(
        self,
        cache: WorkCache,
        source: WorkSource,
        extractor: ExtractionStrategy,
        single_flight: bool = False,
    ):
        self._cache = cache
        self._source = source
        self._extractor = extractor
        self._single_flight = single_flight
        self._in_flight: dict[int, asyncio.Task[WorkMetadata]] = {}

    @property
    def cache(self) -> WorkCache:
        return self._cache

    async def get_or_fetch(self, work_id: int) -> WorkMetadata:
        cached = self._cache.get(work_id)
        if cached is not None:
            logger.info("Using cached metadata for work %d", work_id)
            return cached

        if not self._single_flight:
            return await self._fetch_and_store(work_id)

        task = self._in_flight.get(work_id)
        if task is None:
            task = asyncio.create_task(self._fetch_and_store(work_id))
            self._in_flight[work_id] = task
            task.add_done_callback(partial(self._forget, work_id))
        else:
            logger.debug("Joining in-flight fetch for work %d", work_id)
        # A caller going away must not cancel the fetch the others wait on
        return await asyncio.shield(task)

    def _forget(self, work_id: int, task: asyncio.Task[WorkMetadata]) -> None:
        if self._in_flight.get(work_id) is task:
            del self._in_flight[work_id]
        if not task.cancelled():
            # Mark retrieved; every waiter may have gone away
            task.exception()

    @property
    def in_flight(self) -> int:
        return len(self._in_flight)

    async def _fetch_and_store(self, work_id: int) -> WorkMetadata:
        text = await self._source.fetch_work(work_id)
        work = self._extractor.extract(parse_document(text), work_id)
        self._cache.put(work)
        logger.info("Caching metadata for work %d", work_id)
        return work
