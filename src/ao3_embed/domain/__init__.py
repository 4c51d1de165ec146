"""Domain types: the work record, its chapter grammar and the error taxonomy."""

from ao3_embed.domain.chapters import format_total, parse_chapters
from ao3_embed.domain.exceptions import (
    EmbedError,
    ErrorCode,
    ExtractionError,
    FieldNotFoundError,
    MalformedChaptersError,
    MalformedNumberError,
    MinificationError,
    TemplateRenderError,
    TransportError,
)
from ao3_embed.domain.work import WorkMetadata

__all__ = [
    "EmbedError",
    "ErrorCode",
    "ExtractionError",
    "FieldNotFoundError",
    "MalformedChaptersError",
    "MalformedNumberError",
    "MinificationError",
    "TemplateRenderError",
    "TransportError",
    "WorkMetadata",
    "format_total",
    "parse_chapters",
]
