"""API route handlers."""

from ao3_embed.presentation.routes import fallback, oembed, works

__all__ = ["fallback", "oembed", "works"]
