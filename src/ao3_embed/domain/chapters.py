"""Parser for the ``chapter/total`` statistic."""

import re

from ao3_embed.domain.exceptions import MalformedChaptersError

# The origin renders an unknown total either as nothing or as "?"
UNKNOWN_TOTAL = "?"

_CHAPTERS = re.compile(r"(?P<chapter>[0-9]+)/(?P<total>[0-9]+|\?)?")


def parse_chapters(text: str) -> tuple[int, int | None]:
    """Parse ``"5/10"`` into ``(5, 10)`` and ``"5/"`` or ``"5/?"`` into ``(5, None)``.

    The whole token has to match; trailing text, a missing separator or a
    non-numeric chapter raise ``MalformedChaptersError``.
    """
    match = _CHAPTERS.fullmatch(text)
    if match is None:
        raise MalformedChaptersError(text)

    total_text = match.group("total")
    try:
        chapter = int(match.group("chapter"))
        total = None if total_text in (None, UNKNOWN_TOTAL) else int(total_text)
    except ValueError as e:
        raise MalformedChaptersError(text, "number too long") from e
    return chapter, total


def format_total(total: int | None) -> str:
    """Render a total chapter count the way the origin does."""
    return UNKNOWN_TOTAL if total is None else str(total)
