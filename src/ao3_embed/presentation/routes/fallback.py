"""Catch-all redirect to the origin."""

import logging

from fastapi import APIRouter, Request
from fastapi.responses import RedirectResponse

from ao3_embed.presentation.dependencies import SettingsDep
from ao3_embed.presentation.redirects import origin_url_for, temporary_redirect

logger = logging.getLogger(__name__)

router = APIRouter()

ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


@router.api_route("/{full_path:path}", methods=ALL_METHODS, include_in_schema=False)
async def origin_redirect(request: Request, settings: SettingsDep) -> RedirectResponse:
    # raw_path keeps the path exactly as the caller encoded it
    raw_path = request.scope.get("raw_path") or request.scope["path"].encode()
    raw_path = raw_path.split(b"?", 1)[0]
    query_string = request.scope.get("query_string", b"")
    url = origin_url_for(
        settings.origin_url,
        raw_path.decode("latin-1"),
        query_string.decode("latin-1"),
    )
    logger.info("Redirecting %s to origin", request.url.path)
    return temporary_redirect(url)
