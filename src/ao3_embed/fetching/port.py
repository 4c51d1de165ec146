from typing import Protocol


class WorkSource(Protocol):
    """Port for fetching a work's page markup from the origin."""

    async def fetch_work(self, work_id: int) -> str:
        """Return the raw page text or raise ``TransportError``."""
        ...
