"""Field schemas for the two page layouts works appear in.

Each schema is a table of ``FieldSpec`` rows. When the origin changes its
markup the fix belongs here, not in the extractor.
"""

from dataclasses import dataclass
from typing import Literal

Scope = Literal["root", "meta", "stats"]
FieldKind = Literal["text", "tag", "list", "number", "attribute", "chapters"]

# Items inside a tag container on the single work view
TAG = "a.tag"


@dataclass(frozen=True)
class FieldSpec:
    """One row of an extraction schema.

    ``selector`` picks a single node (for list fields: the container) inside
    the ``scope`` node; ``None`` means the scope node itself. List and tag
    fields then collect ``items`` inside that node. A required field whose
    selector matches nothing fails the whole extraction; an optional one
    comes out as ``None`` or an empty tuple.
    """

    name: str
    scope: Scope
    selector: str | None
    kind: FieldKind = "text"
    required: bool = True
    items: str | None = None
    attribute: str | None = None
    separator: str | None = None


@dataclass(frozen=True)
class ExtractionSchema:
    name: str
    version: int
    meta_block: str
    stats_block: str
    fields: tuple[FieldSpec, ...]
    # Selector for the entry nodes when a page holds several works
    entry: str | None = None
    stats_within_meta: bool = False


WORK_PAGE_SCHEMA = ExtractionSchema(
    name="work_page",
    version=1,
    meta_block="dl.work",
    stats_block="dl.stats",
    stats_within_meta=True,
    fields=(
        FieldSpec("title", "root", "h2.title"),
        FieldSpec("author", "root", 'a[rel="author"]'),
        FieldSpec("author_url", "root", 'a[rel="author"]', "attribute", attribute="href"),
        FieldSpec("rating", "meta", "dd.rating", "tag", items=TAG),
        FieldSpec("warnings", "meta", "dd.warning", "list", items=TAG),
        FieldSpec("categories", "meta", "dd.category", "list", required=False, items=TAG),
        FieldSpec("fandoms", "meta", "dd.fandom", "list", items=TAG),
        FieldSpec("relationships", "meta", "dd.relationship", "list", required=False, items=TAG),
        FieldSpec("characters", "meta", "dd.character", "list", required=False, items=TAG),
        FieldSpec("tags", "meta", "dd.freeform", "list", required=False, items=TAG),
        FieldSpec("language", "meta", "dd.language", required=False),
        FieldSpec("published_date", "stats", "dd.published"),
        FieldSpec("words", "stats", "dd.words", "number"),
        FieldSpec("chapters", "stats", "dd.chapters", "chapters"),
        FieldSpec("kudos", "stats", "dd.kudos", "number", required=False),
        FieldSpec("hits", "stats", "dd.hits", "number", required=False),
    ),
)

LISTING_ENTRY_SCHEMA = ExtractionSchema(
    name="listing_entry",
    version=1,
    entry="li.work.blurb",
    meta_block="ul.tags",
    stats_block="dl.stats",
    fields=(
        FieldSpec("title", "root", "h4.heading a"),
        FieldSpec("author", "root", 'h4.heading a[rel="author"]'),
        FieldSpec(
            "author_url",
            "root",
            'h4.heading a[rel="author"]',
            "attribute",
            attribute="href",
        ),
        FieldSpec("rating", "root", "ul.required-tags span.rating span.text"),
        FieldSpec(
            "categories",
            "root",
            "ul.required-tags span.category",
            "list",
            required=False,
            items="span.text",
            separator=",",
        ),
        FieldSpec("fandoms", "root", "h5.fandoms", "list", items=TAG),
        FieldSpec("warnings", "meta", None, "list", items="li.warnings a.tag"),
        FieldSpec("relationships", "meta", None, "list", items="li.relationships a.tag"),
        FieldSpec("characters", "meta", None, "list", items="li.characters a.tag"),
        FieldSpec("tags", "meta", None, "list", items="li.freeforms a.tag"),
        FieldSpec("published_date", "root", "p.datetime"),
        FieldSpec("language", "stats", "dd.language", required=False),
        FieldSpec("words", "stats", "dd.words", "number"),
        FieldSpec("chapters", "stats", "dd.chapters", "chapters"),
        FieldSpec("kudos", "stats", "dd.kudos", "number", required=False),
        FieldSpec("hits", "stats", "dd.hits", "number", required=False),
    ),
)
