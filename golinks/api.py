"""
JSON API for reading and editing routes.
"""

from __future__ import annotations

import logging
from urllib.parse import urlparse

from fastapi import APIRouter, Depends, HTTPException, Query

from golinks.db import Route, RouteStore
from golinks.dependencies import get_route_store, require_account
from golinks.errors import BackendError, InvalidUrlError
from golinks.names import clean_name, generated_name, validate_name
from golinks.schemas import (
    ListRoutesResponse,
    PutRouteRequest,
    RouteOut,
    RouteResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(require_account)])

MAX_PAGE_SIZE = 1000


def validate_url(url: str) -> None:
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise InvalidUrlError(url)


@router.get("/url/{name:path}", response_model=RouteResponse)
def get_url(name: str, store: RouteStore = Depends(get_route_store)):
    name = clean_name(name)
    if not name:
        raise HTTPException(status_code=400, detail="name required")
    try:
        route = store.get(name)
    except Exception as exc:
        raise BackendError(name, exc) from exc
    if route is None:
        return RouteResponse()
    return RouteResponse(route=RouteOut.from_route(route))


@router.post("/url/{name:path}", response_model=RouteResponse)
def put_url(
    name: str,
    payload: PutRouteRequest,
    store: RouteStore = Depends(get_route_store),
):
    """
    Create or replace the route for ``name``.

    An empty name gets a generated one.
    """
    if not payload.url:
        raise HTTPException(status_code=400, detail="url required")
    validate_url(payload.url)

    name = clean_name(name)
    if name:
        validate_name(name)

    try:
        if not name:
            name = generated_name(store.next_id())
        route = Route(name=name, url=payload.url)
        store.put(name, route)
    except Exception as exc:
        raise BackendError(name, exc) from exc

    logger.info("stored route %r -> %s", name, payload.url)
    return RouteResponse(route=RouteOut.from_route(route))


@router.delete("/url/{name:path}", response_model=RouteResponse)
def delete_url(name: str, store: RouteStore = Depends(get_route_store)):
    name = clean_name(name)
    if not name:
        raise HTTPException(status_code=400, detail="name required")
    try:
        store.delete(name)
    except Exception as exc:
        raise BackendError(name, exc) from exc
    logger.info("deleted route %r", name)
    return RouteResponse()


@router.get("/urls/", response_model=ListRoutesResponse)
def list_urls(
    cursor: str = Query(""),
    limit: int = Query(100, ge=1, le=MAX_PAGE_SIZE),
    store: RouteStore = Depends(get_route_store),
):
    try:
        routes = store.list_routes(start=cursor, limit=limit)
    except Exception as exc:
        raise BackendError(cursor, exc) from exc
    next_cursor = routes[-1].name if len(routes) == limit else None
    return ListRoutesResponse(
        routes=[RouteOut.from_route(route) for route in routes],
        next=next_cursor,
    )
