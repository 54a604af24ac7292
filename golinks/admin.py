"""
Admin endpoints, mounted only when ``Settings.admin`` is enabled.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from golinks.db import RouteStore
from golinks.dependencies import get_route_store, require_account
from golinks.errors import BackendError
from golinks.schemas import DumpResponse, RouteOut

router = APIRouter(dependencies=[Depends(require_account)])


@router.get("/dumps", response_model=DumpResponse)
def dump_routes(store: RouteStore = Depends(get_route_store)):
    try:
        routes = store.get_all()
    except Exception as exc:
        raise BackendError("", exc) from exc
    return DumpResponse(routes=[RouteOut.from_route(route) for route in routes])
