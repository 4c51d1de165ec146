"""Schema-driven extraction of work metadata from page markup."""

from __future__ import annotations

import logging
import re
from typing import Any, Protocol

from bs4 import BeautifulSoup, Tag

from ao3_embed.domain import (
    FieldNotFoundError,
    MalformedChaptersError,
    MalformedNumberError,
    WorkMetadata,
    parse_chapters,
)
from ao3_embed.extraction.schema import (
    LISTING_ENTRY_SCHEMA,
    WORK_PAGE_SCHEMA,
    ExtractionSchema,
    FieldSpec,
)

logger = logging.getLogger(__name__)

_DIGITS = re.compile(r"[0-9]+")
_ENTRY_ID = re.compile(r"work_(?P<id>[0-9]+)")


class ExtractionStrategy(Protocol):
    """Turns one work's node into a ``WorkMetadata`` or raises ``ExtractionError``."""

    def extract(self, root: Tag, work_id: int) -> WorkMetadata:
        ...


def parse_document(text: str) -> BeautifulSoup:
    return BeautifulSoup(text, "html.parser")


def _text(node: Tag) -> str:
    return node.get_text().strip()


def _parse_number(field: str, raw: str) -> int:
    """Parse ``"12,345"`` as ``12345``."""
    cleaned = raw.replace(",", "").strip()
    if not _DIGITS.fullmatch(cleaned):
        raise MalformedNumberError(field, raw)
    try:
        return int(cleaned)
    except ValueError as e:
        # Digit runs past the interpreter's int conversion limit
        raise MalformedNumberError(field, raw) from e


class SchemaExtractor:
    """Applies an ``ExtractionSchema`` to a document or entry node.

    Extraction is all-or-nothing: the first required field that cannot be
    found or parsed aborts with an ``ExtractionError``.
    """

    def __init__(self, schema: ExtractionSchema):
        self.schema = schema

    def extract(self, root: Tag, work_id: int) -> WorkMetadata:
        meta = self._select_block(root, "meta_block", self.schema.meta_block)
        stats_parent = meta if self.schema.stats_within_meta else root
        stats = self._select_block(stats_parent, "stats_block", self.schema.stats_block)
        scopes = {"root": root, "meta": meta, "stats": stats}

        values: dict[str, Any] = {}
        for row in self.schema.fields:
            values[row.name] = self._read(scopes[row.scope], row)

        chapter, total_chapters = values.pop("chapters")
        return WorkMetadata(
            id=work_id,
            chapter=chapter,
            total_chapters=total_chapters,
            **values,
        )

    @staticmethod
    def _select_block(parent: Tag, name: str, selector: str) -> Tag:
        block = parent.select_one(selector)
        if block is None:
            raise FieldNotFoundError(name, selector)
        return block

    def _read(self, scope: Tag, row: FieldSpec) -> Any:
        node = scope if row.selector is None else scope.select_one(row.selector)
        if node is None:
            if row.required:
                raise FieldNotFoundError(row.name, row.selector or "")
            return () if row.kind == "list" else None

        if row.kind == "list":
            return self._read_list(node, row)
        if row.kind == "tag":
            first = node.select_one(row.items) if row.items else None
            if first is None:
                raise FieldNotFoundError(row.name, f"{row.selector} {row.items}")
            return _text(first)
        if row.kind == "attribute":
            value = node.get(row.attribute or "")
            if value is None:
                raise FieldNotFoundError(row.name, f"{row.selector}[{row.attribute}]")
            return value if isinstance(value, str) else " ".join(value)
        if row.kind == "number":
            return _parse_number(row.name, _text(node))
        if row.kind == "chapters":
            return self._read_chapters(_text(node))
        return _text(node)

    @staticmethod
    def _read_list(node: Tag, row: FieldSpec) -> tuple[str, ...]:
        items = node.select(row.items) if row.items else [node]
        texts = [_text(item) for item in items]
        if row.separator:
            texts = [
                part.strip()
                for text in texts
                for part in text.split(row.separator)
                if part.strip()
            ]
        return tuple(texts)

    @staticmethod
    def _read_chapters(raw: str) -> tuple[int, int | None]:
        chapter, total = parse_chapters(raw)
        if total is not None and chapter > total:
            raise MalformedChaptersError(raw, "chapter exceeds total")
        return chapter, total


work_page_extractor = SchemaExtractor(WORK_PAGE_SCHEMA)
listing_entry_extractor = SchemaExtractor(LISTING_ENTRY_SCHEMA)


def extract_work_page(text: str, work_id: int) -> WorkMetadata:
    """Extract metadata from a single work view page."""
    return work_page_extractor.extract(parse_document(text), work_id)


def extract_listing(text: str) -> list[WorkMetadata]:
    """Extract every entry of a listing page (search results, tag listings, ...)."""
    schema = LISTING_ENTRY_SCHEMA
    document = parse_document(text)
    works: list[WorkMetadata] = []
    for entry in document.select(schema.entry or ""):
        works.append(listing_entry_extractor.extract(entry, _entry_id(entry)))
    logger.debug("Extracted %d listing entries", len(works))
    return works


def _entry_id(entry: Tag) -> int:
    raw = entry.get("id")
    if not isinstance(raw, str):
        raise FieldNotFoundError("id", f"{LISTING_ENTRY_SCHEMA.entry}[id]")
    match = _ENTRY_ID.fullmatch(raw)
    if match is None:
        raise MalformedNumberError("id", raw)
    return int(match.group("id"))
