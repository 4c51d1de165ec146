"""Application services."""

from ao3_embed.service.metadata import WorkMetadataService

__all__ = ["WorkMetadataService"]
