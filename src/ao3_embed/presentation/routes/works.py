"""Work preview endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Header
from fastapi.responses import HTMLResponse, Response

from ao3_embed.config import Settings
from ao3_embed.domain import EmbedError
from ao3_embed.presentation.bots import BotClassifier
from ao3_embed.presentation.composer import PreviewComposer
from ao3_embed.presentation.dependencies import (
    BotClassifierDep,
    ComposerDep,
    MetadataServiceDep,
    SettingsDep,
)
from ao3_embed.presentation.redirects import temporary_redirect, work_redirect_url
from ao3_embed.service import WorkMetadataService

logger = logging.getLogger(__name__)

router = APIRouter()

UserAgentHeader = Annotated[str | None, Header(alias="user-agent")]


@router.api_route(
    "/works/{work_id:int}", methods=["GET", "HEAD"], include_in_schema=False
)
async def work_preview(
    work_id: int,
    settings: SettingsDep,
    service: MetadataServiceDep,
    composer: ComposerDep,
    classifier: BotClassifierDep,
    user_agent: UserAgentHeader = None,
) -> Response:
    return await _serve_work(
        work_id, None, user_agent, settings, service, composer, classifier
    )


@router.api_route(
    "/works/{work_id:int}/{path:path}", methods=["GET", "HEAD"], include_in_schema=False
)
async def work_preview_with_path(
    work_id: int,
    path: str,
    settings: SettingsDep,
    service: MetadataServiceDep,
    composer: ComposerDep,
    classifier: BotClassifierDep,
    user_agent: UserAgentHeader = None,
) -> Response:
    return await _serve_work(
        work_id, path, user_agent, settings, service, composer, classifier
    )


async def _serve_work(
    work_id: int,
    path: str | None,
    user_agent: str | None,
    settings: Settings,
    service: WorkMetadataService,
    composer: PreviewComposer,
    classifier: BotClassifier,
) -> Response:
    """Preview page for crawlers, redirect for everyone and everything else."""
    redirect_url = work_redirect_url(settings.origin_url, work_id, path)

    if not classifier.is_bot(user_agent):
        logger.info("Redirecting visitor for work %d", work_id)
        return temporary_redirect(redirect_url)

    try:
        work = await service.get_or_fetch(work_id)
        html = composer.render(work, redirect_url)
    except EmbedError as e:
        logger.warning(
            "Falling back to redirect for work %d: stage=%s code=%s cause=%s",
            work_id,
            e.stage,
            e.code.value,
            e,
        )
        return temporary_redirect(redirect_url)

    return HTMLResponse(html)
