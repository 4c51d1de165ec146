"""Fetching work pages from the origin."""

from ao3_embed.fetching.client import ArchiveClient
from ao3_embed.fetching.port import WorkSource

__all__ = ["ArchiveClient", "WorkSource"]
