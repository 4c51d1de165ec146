"""Redirects to the origin site."""

from fastapi import status
from fastapi.responses import RedirectResponse


def work_redirect_url(origin_url: str, work_id: int, path: str | None = None) -> str:
    return f"{origin_url}/works/{work_id}/{path or ''}"


def origin_url_for(origin_url: str, raw_path: str, query_string: str = "") -> str:
    """Same path and query on the origin, only scheme and authority replaced."""
    url = origin_url + (raw_path if raw_path.startswith("/") else "/" + raw_path)
    if query_string:
        url = f"{url}?{query_string}"
    return url


def temporary_redirect(url: str) -> RedirectResponse:
    return RedirectResponse(url, status_code=status.HTTP_307_TEMPORARY_REDIRECT)
