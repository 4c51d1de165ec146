"""Tests for the cache-backed metadata service."""

import asyncio

import pytest

from ao3_embed.domain import FieldNotFoundError, TransportError
from ao3_embed.extraction import work_page_extractor
from ao3_embed.service import WorkMetadataService
from ao3_embed.storage import WorkCache
from tests.shared.fakes import FakeSource
from tests.shared.html import work_page


class SlowSource(FakeSource):
    """Source that waits until released, to hold fetches in flight."""

    def __init__(self, pages: dict[int, str]):
        super().__init__(pages)
        self.release = asyncio.Event()

    async def fetch_work(self, work_id: int) -> str:
        self.calls.append(work_id)
        await self.release.wait()
        if self.error is not None:
            raise self.error
        return self.pages[work_id]


class TestGetOrFetch:
    @pytest.mark.asyncio
    async def test_miss_fetches_and_caches(self, service, source, cache):
        work = await service.get_or_fetch(42)

        assert work.id == 42
        assert work.words == 12345
        assert source.calls == [42]
        assert cache.get(42) is work

    @pytest.mark.asyncio
    async def test_second_call_is_served_from_cache(self, service, source):
        first = await service.get_or_fetch(42)
        second = await service.get_or_fetch(42)

        assert second is first
        assert source.calls == [42]

    @pytest.mark.asyncio
    async def test_hit_does_no_network(self, cache, sample_work):
        source = FakeSource(error=AssertionError("should not fetch"))
        service = WorkMetadataService(cache, source, work_page_extractor)
        cache.put(sample_work)

        assert await service.get_or_fetch(sample_work.id) is sample_work
        assert source.calls == []

    @pytest.mark.asyncio
    async def test_transport_failure_is_not_cached(self, cache):
        source = FakeSource(error=TransportError("https://origin/works/1", "timeout"))
        service = WorkMetadataService(cache, source, work_page_extractor)

        with pytest.raises(TransportError):
            await service.get_or_fetch(1)
        with pytest.raises(TransportError):
            await service.get_or_fetch(1)

        assert source.calls == [1, 1]
        assert 1 not in cache

    @pytest.mark.asyncio
    async def test_extraction_failure_is_not_cached(self, cache):
        source = FakeSource(pages={1: work_page(title=None)})
        service = WorkMetadataService(cache, source, work_page_extractor)

        with pytest.raises(FieldNotFoundError):
            await service.get_or_fetch(1)

        assert len(cache) == 0

    @pytest.mark.asyncio
    async def test_concurrent_misses_fetch_independently(self):
        """Without single-flight every concurrent miss does its own fetch."""
        source = SlowSource(pages={42: work_page()})
        cache = WorkCache(max_entries=3)
        service = WorkMetadataService(cache, source, work_page_extractor)

        tasks = [asyncio.create_task(service.get_or_fetch(42)) for _ in range(3)]
        await asyncio.sleep(0)
        source.release.set()
        works = await asyncio.gather(*tasks)

        assert source.calls == [42, 42, 42]
        assert all(w.id == 42 for w in works)
        assert len(cache) == 1


class TestSingleFlight:
    @pytest.mark.asyncio
    async def test_concurrent_misses_share_one_fetch(self):
        source = SlowSource(pages={42: work_page()})
        service = WorkMetadataService(
            WorkCache(max_entries=3), source, work_page_extractor, single_flight=True
        )

        tasks = [asyncio.create_task(service.get_or_fetch(42)) for _ in range(5)]
        await asyncio.sleep(0)
        assert service.in_flight == 1
        source.release.set()
        works = await asyncio.gather(*tasks)

        assert source.calls == [42]
        assert all(w is works[0] for w in works)

    @pytest.mark.asyncio
    async def test_failure_reaches_every_waiter_and_is_forgotten(self):
        source = SlowSource(pages={})
        source.error = TransportError("https://origin/works/9", "timeout")
        cache = WorkCache(max_entries=3)
        service = WorkMetadataService(cache, source, work_page_extractor, single_flight=True)

        tasks = [asyncio.create_task(service.get_or_fetch(9)) for _ in range(2)]
        await asyncio.sleep(0)
        source.release.set()
        results = await asyncio.gather(*tasks, return_exceptions=True)
        await asyncio.sleep(0)

        assert all(isinstance(r, TransportError) for r in results)
        assert source.calls == [9]
        assert service.in_flight == 0
        assert 9 not in cache

    @pytest.mark.asyncio
    async def test_cancelled_caller_does_not_cancel_shared_fetch(self):
        source = SlowSource(pages={42: work_page()})
        cache = WorkCache(max_entries=3)
        service = WorkMetadataService(cache, source, work_page_extractor, single_flight=True)

        leader = asyncio.create_task(service.get_or_fetch(42))
        follower = asyncio.create_task(service.get_or_fetch(42))
        await asyncio.sleep(0)
        leader.cancel()
        await asyncio.sleep(0)
        source.release.set()
        work = await follower

        assert leader.cancelled()
        assert work.id == 42
        assert 42 in cache
