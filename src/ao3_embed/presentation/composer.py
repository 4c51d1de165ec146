"""Turns work metadata into the minified preview page."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from urllib.parse import urljoin

import minify_html
from jinja2 import (
    Environment,
    PackageLoader,
    StrictUndefined,
    TemplateError,
    select_autoescape,
)

from ao3_embed.domain import (
    MinificationError,
    TemplateRenderError,
    WorkMetadata,
    format_total,
)
from ao3_embed.presentation.contracts import EmbedRequest

logger = logging.getLogger(__name__)

WORK_TEMPLATE = "work.html"

Minifier = Callable[[str], str]


def join_quoted(labels: Iterable[str]) -> str:
    return ", ".join(labels)


def minify_markup(markup: str) -> str:
    """Minify the rendered page, keeping the doctype and document skeleton."""
    try:
        minified = minify_html.minify(
            markup,
            keep_closing_tags=True,
            keep_html_and_head_opening_tags=True,
        )
        if isinstance(minified, bytes):
            minified = minified.decode("utf-8")
    except (SyntaxError, ValueError) as e:
        # UnicodeDecodeError is a ValueError
        raise MinificationError(f"{type(e).__name__}: {e}") from e
    return minified


def create_environment() -> Environment:
    return Environment(
        loader=PackageLoader("ao3_embed", "templates"),
        autoescape=select_autoescape(["html"]),
        undefined=StrictUndefined,
    )


class PreviewComposer:
    """Builds the preview page and embed descriptor URL for a work."""

    def __init__(
        self,
        host: str,
        origin_url: str,
        environment: Environment | None = None,
        minifier: Minifier = minify_markup,
    ):
        self._host = host.rstrip("/")
        self._origin_url = origin_url.rstrip("/")
        self._environment = environment or create_environment()
        self._minifier = minifier

    @staticmethod
    def describe(work: WorkMetadata) -> str:
        """Warnings, characters and free-form tags, one group per line."""
        return "\n".join(
            join_quoted(group) for group in (work.warnings, work.characters, work.tags)
        )

    def embed_url(self, work: WorkMetadata) -> str:
        request = EmbedRequest(
            id=str(work.id),
            author=work.author,
            words=work.words,
            chapters=work.chapter,
            total_chapters=format_total(work.total_chapters),
            date=work.published_date,
        )
        return self._host + request.to_path()

    def author_url(self, work: WorkMetadata) -> str:
        return urljoin(self._origin_url + "/", work.author_url)

    def render(self, work: WorkMetadata, redirect_url: str) -> str:
        """Render and minify the preview page."""
        context = {
            "work": work,
            "redirect_url": redirect_url,
            "author_url": self.author_url(work),
            "description": self.describe(work),
            "embed_url": self.embed_url(work),
            "origin_url": self._origin_url,
        }
        try:
            html = self._environment.get_template(WORK_TEMPLATE).render(**context)
        except TemplateError as e:
            raise TemplateRenderError(WORK_TEMPLATE, f"{type(e).__name__}: {e}") from e

        minified = self._minifier(html)
        logger.debug(
            "Rendered work %d: %d bytes, %d minified",
            work.id,
            len(html),
            len(minified),
        )
        return minified
