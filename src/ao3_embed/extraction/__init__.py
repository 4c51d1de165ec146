"""Markup extraction: schema tables and the strategies that apply them."""

from ao3_embed.extraction.extractor import (
    ExtractionStrategy,
    SchemaExtractor,
    extract_listing,
    extract_work_page,
    listing_entry_extractor,
    parse_document,
    work_page_extractor,
)
from ao3_embed.extraction.schema import (
    LISTING_ENTRY_SCHEMA,
    WORK_PAGE_SCHEMA,
    ExtractionSchema,
    FieldSpec,
)

__all__ = [
    "LISTING_ENTRY_SCHEMA",
    "WORK_PAGE_SCHEMA",
    "ExtractionSchema",
    "ExtractionStrategy",
    "FieldSpec",
    "SchemaExtractor",
    "extract_listing",
    "extract_work_page",
    "listing_entry_extractor",
    "parse_document",
    "work_page_extractor",
]
