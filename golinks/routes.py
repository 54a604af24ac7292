"""
Browser-facing routes: shortcut redirects, the edit page and small status
endpoints.

The catch-all shortcut route must be registered after every other route.
"""

from __future__ import annotations

import html
import logging
from pathlib import Path

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import (
    FileResponse,
    HTMLResponse,
    PlainTextResponse,
    RedirectResponse,
)

from golinks.config import Settings
from golinks.db import RouteStore
from golinks.dependencies import (
    get_app_settings,
    get_lookup_executor,
    get_route_store,
    require_account,
)
from golinks.errors import BackendError
from golinks.names import (
    EDIT_PREFIX,
    SUBTREE_NAMES,
    clean_name,
    has_banned_prefix,
    is_banned_name,
    parse_name,
)
from golinks.resolver import LookupExecutor, dispatch, resolve

logger = logging.getLogger(__name__)

ASSETS_DIR = Path(__file__).parent / "assets"

router = APIRouter()
fallback_router = APIRouter()


def _asset_path(name: str) -> Path:
    if not name or "/" in name or "\\" in name or name.startswith("."):
        raise HTTPException(status_code=404, detail="Not Found")
    path = ASSETS_DIR / name
    if not path.is_file():
        raise HTTPException(status_code=404, detail="Not Found")
    return path


@router.get("/edit/{rest:path}", dependencies=[Depends(require_account)])
def edit_page(request: Request):
    name = clean_name(parse_name(EDIT_PREFIX, request.url.path))

    # A reserved name can't be claimed, so send the browser to whatever the
    # service itself serves there.
    if is_banned_name(name):
        logger.debug("edit of reserved name %r redirected", name)
        return RedirectResponse(f"/{name}", status_code=307)

    return FileResponse(_asset_path("edit.html"), media_type="text/html")


@router.get("/s/{asset}")
def static_asset(asset: str):
    return FileResponse(_asset_path(asset))


@router.get(
    "/links/",
    response_class=HTMLResponse,
    dependencies=[Depends(require_account)],
)
def links_page(store: RouteStore = Depends(get_route_store)):
    try:
        routes = sorted(store.get_all(), key=lambda route: route.name)
    except Exception as exc:
        raise BackendError("", exc) from exc

    rows = "\n".join(
        '<tr><td><a href="/{0}">{0}</a></td><td>{1}</td></tr>'.format(
            html.escape(route.name), html.escape(route.url)
        )
        for route in routes
    )
    return (
        "<!DOCTYPE html>\n<html><head><title>links</title></head><body>"
        f"<table>\n{rows}\n</table></body></html>"
    )


@router.get("/version", response_class=PlainTextResponse)
def version(settings: Settings = Depends(get_app_settings)):
    return settings.version


@router.get("/healthz", response_class=PlainTextResponse)
def healthz():
    return "ok"


@fallback_router.get("/{path:path}")
async def follow_shortcut(
    request: Request,
    store: RouteStore = Depends(get_route_store),
    settings: Settings = Depends(get_app_settings),
    executor: LookupExecutor = Depends(get_lookup_executor),
):
    """
    Redirect a shortcut to its target, or to the edit page when unmapped.
    """
    name = clean_name(parse_name("/", request.url.path))
    if not name:
        return RedirectResponse(EDIT_PREFIX, status_code=307)

    if name in SUBTREE_NAMES:
        return RedirectResponse(f"/{name}/", status_code=307)

    # Unmatched paths under a system prefix (e.g. "/api" or "/links/x") would
    # bounce between here and the edit page.
    if has_banned_prefix(name):
        raise HTTPException(status_code=404, detail="Not Found")

    outcome = await resolve(
        store,
        name,
        timeout=settings.lookup_timeout_seconds,
        executor=executor,
    )
    return dispatch(outcome, name)
