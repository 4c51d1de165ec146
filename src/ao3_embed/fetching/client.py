"""HTTP client for the origin archive."""

from __future__ import annotations

import logging

import httpx

from ao3_embed.domain import TransportError
from ao3_embed.fetching.port import WorkSource

logger = logging.getLogger(__name__)


class ArchiveClient(WorkSource):
    """Fetches work pages from the origin site."""

    def __init__(
        self,
        base_url: str = "https://archiveofourown.org",
        timeout: float = 10.0,
        user_agent: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._user_agent = user_agent
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def base_url(self) -> str:
        return self._base_url

    def work_url(self, work_id: int) -> str:
        # view_adult skips the content-warning interstitial
        return f"{self._base_url}/works/{work_id}?view_adult=true"

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            headers = {"User-Agent": self._user_agent} if self._user_agent else None
            self._client = httpx.AsyncClient(
                timeout=self._timeout,
                headers=headers,
                follow_redirects=True,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def fetch_work(self, work_id: int) -> str:
        url = self.work_url(work_id)
        client = await self._get_client()
        try:
            response = await client.get(url)
            response.raise_for_status()
        except httpx.TimeoutException as e:
            raise TransportError(url, f"timeout ({type(e).__name__})") from e
        except httpx.HTTPStatusError as e:
            raise TransportError(
                url,
                f"origin returned {e.response.status_code}",
                status_code=e.response.status_code,
            ) from e
        except httpx.HTTPError as e:
            raise TransportError(url, f"{type(e).__name__}: {e}") from e

        logger.debug("Fetched work %d (%d bytes)", work_id, len(response.content))
        return response.text
