"""Deciding whether a caller is a crawler/unfurler or a person."""

import re
from typing import Protocol

from crawlerdetect import CrawlerDetect

# Link unfurlers that matter most for previews; checked before the
# general crawler list so they keep working if that list drifts.
KNOWN_UNFURLERS = (
    "Discordbot",
    "Twitterbot",
    "Slackbot",
    "TelegramBot",
    "facebookexternalhit",
    "WhatsApp",
    "SkypeUriPreview",
    "Embedly",
    "redditbot",
    "Mastodon",
)

_UNFURLER_PATTERN = re.compile("|".join(map(re.escape, KNOWN_UNFURLERS)), re.IGNORECASE)


class BotClassifier(Protocol):
    def is_bot(self, user_agent: str | None) -> bool:
        """Return True for crawler-like user agents."""
        ...


class CrawlerDetectClassifier:
    """Bot classifier backed by the CrawlerDetect signature list.

    A request without a user agent counts as a person.
    """

    def __init__(self) -> None:
        self._detector = CrawlerDetect()

    def is_bot(self, user_agent: str | None) -> bool:
        if not user_agent or not user_agent.strip():
            return False
        if _UNFURLER_PATTERN.search(user_agent):
            return True
        return bool(self._detector.isCrawler(user_agent))
