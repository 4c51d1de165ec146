"""Tests for single work page extraction."""

import pytest

from ao3_embed.domain import (
    FieldNotFoundError,
    MalformedChaptersError,
    MalformedNumberError,
)
from ao3_embed.extraction import (
    WORK_PAGE_SCHEMA,
    FieldSpec,
    extract_work_page,
    parse_document,
    work_page_extractor,
)
from tests.shared.html import work_page


class TestExtractWorkPage:
    def test_full_page(self):
        work = extract_work_page(
            work_page(
                characters=["Alice", "Bob"],
                relationships=["Alice/Bob"],
                freeforms=["Fluff"],
                categories=["F/M"],
            ),
            42,
        )

        assert work.id == 42
        assert work.title == "Example Title"
        assert work.author == "Jane"
        assert work.author_url == "/users/Jane/pseuds/Jane"
        assert work.rating == "Teen And Up Audiences"
        assert work.warnings == ("No Archive Warnings Apply",)
        assert work.categories == ("F/M",)
        assert work.fandoms == ("Fandom A",)
        assert work.relationships == ("Alice/Bob",)
        assert work.characters == ("Alice", "Bob")
        assert work.tags == ("Fluff",)
        assert work.language == "English"
        assert work.published_date == "2024-01-01"

    def test_numbers_and_chapters(self):
        """'3/7' and '12,345' end up as numbers."""
        work = extract_work_page(work_page(chapters="3/7", words="12,345"), 1)

        assert work.chapter == 3
        assert work.total_chapters == 7
        assert work.words == 12345
        assert work.kudos == 1024
        assert work.hits == 20480

    def test_open_ended_chapters(self):
        work = extract_work_page(work_page(chapters="4/?"), 1)

        assert work.chapter == 4
        assert work.total_chapters is None

    def test_list_fields_keep_document_order(self):
        work = extract_work_page(work_page(fandoms=["A", "B", "C"]), 1)

        assert work.fandoms == ("A", "B", "C")

    def test_optional_containers_become_empty(self):
        work = extract_work_page(
            work_page(relationships=None, characters=None, freeforms=None), 1
        )

        assert work.relationships == ()
        assert work.characters == ()
        assert work.tags == ()
        assert work.categories == ()

    def test_optional_scalars_become_none(self):
        work = extract_work_page(work_page(language=None, kudos=None, hits=None), 1)

        assert work.language is None
        assert work.kudos is None
        assert work.hits is None

    def test_empty_required_container_is_valid(self):
        """A fandom container without tags is an empty list, not an error."""
        work = extract_work_page(work_page(fandoms=[]), 1)

        assert work.fandoms == ()


class TestAllOrNothing:
    @pytest.mark.parametrize(
        ("omitted", "field"),
        [
            ({"title": None}, "title"),
            ({"author": None}, "author"),
            ({"author_href": None}, "author_url"),
            ({"rating": None}, "rating"),
            ({"published": None}, "published_date"),
            ({"words": None}, "words"),
            ({"chapters": None}, "chapters"),
            ({"omit": ("warning",)}, "warnings"),
            ({"omit": ("fandom",)}, "fandoms"),
            ({"omit": ("stats",)}, "stats_block"),
        ],
    )
    def test_missing_required_field(self, omitted: dict, field: str):
        with pytest.raises(FieldNotFoundError) as exc_info:
            extract_work_page(work_page(**omitted), 1)

        assert exc_info.value.field == field

    def test_missing_meta_block(self):
        with pytest.raises(FieldNotFoundError) as exc_info:
            extract_work_page("<html><body><h2 class='title'>T</h2></body></html>", 1)

        assert exc_info.value.field == "meta_block"

    @pytest.mark.parametrize(
        "row",
        [row for row in WORK_PAGE_SCHEMA.fields if row.required],
        ids=lambda row: row.name,
    )
    def test_each_required_node_is_enforced(self, row: FieldSpec):
        """Dropping the node a required row reads from fails on that row."""
        document = parse_document(work_page())
        scope = {
            "root": document,
            "meta": document.select_one(WORK_PAGE_SCHEMA.meta_block),
            "stats": document.select_one(WORK_PAGE_SCHEMA.stats_block),
        }[row.scope]
        node = scope.select_one(row.selector)
        if row.kind == "attribute":
            del node[row.attribute]
        else:
            node.decompose()

        with pytest.raises(FieldNotFoundError) as exc_info:
            work_page_extractor.extract(document, 1)

        assert exc_info.value.field == row.name

    def test_overlong_words(self):
        with pytest.raises(MalformedNumberError) as exc_info:
            extract_work_page(work_page(words="9" * 5000), 1)

        assert exc_info.value.field == "words"

    def test_overlong_chapters(self):
        with pytest.raises(MalformedChaptersError):
            extract_work_page(work_page(chapters="9" * 5000 + "/"), 1)

    def test_non_numeric_words(self):
        with pytest.raises(MalformedNumberError) as exc_info:
            extract_work_page(work_page(words="lots"), 1)

        assert exc_info.value.field == "words"

    def test_non_numeric_kudos(self):
        with pytest.raises(MalformedNumberError):
            extract_work_page(work_page(kudos="1.5k"), 1)

    def test_bad_chapters(self):
        with pytest.raises(MalformedChaptersError):
            extract_work_page(work_page(chapters="3 of 7"), 1)

    def test_chapter_beyond_total(self):
        with pytest.raises(MalformedChaptersError):
            extract_work_page(work_page(chapters="8/7"), 1)
