"""In-memory storage."""

from ao3_embed.storage.cache import WorkCache

__all__ = ["WorkCache"]
