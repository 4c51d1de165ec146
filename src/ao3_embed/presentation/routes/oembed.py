"""oEmbed descriptor endpoint."""

import logging

from fastapi import APIRouter

from ao3_embed.presentation.contracts import EmbedRequest, EmbedResponse
from ao3_embed.presentation.dependencies import SettingsDep

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "/oembed/{work_id}/{author}/{words:int}/{chapters:int}/{total_chapters}/{date}",
    response_model=EmbedResponse,
)
async def embed_descriptor(
    work_id: str,
    author: str,
    words: int,
    chapters: int,
    total_chapters: str,
    date: str,
    settings: SettingsDep,
) -> EmbedResponse:
    """Describe a work for preview renderers. Never fetches anything."""
    logger.info("Embed request for work %s", work_id)
    request = EmbedRequest(
        id=work_id,
        author=author,
        words=words,
        chapters=chapters,
        total_chapters=total_chapters,
        date=date,
    )
    return EmbedResponse.from_request(request, settings.origin_url)
