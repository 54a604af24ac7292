"""
Pydantic schemas for the JSON API.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from golinks.db import Route


class RouteOut(BaseModel):
    name: str
    url: str
    time: datetime

    @classmethod
    def from_route(cls, route: Route) -> "RouteOut":
        return cls(name=route.name, url=route.url, time=route.time)


class PutRouteRequest(BaseModel):
    url: Optional[str] = Field(default=None, max_length=4096)


class RouteResponse(BaseModel):
    ok: bool = True
    route: Optional[RouteOut] = None


class ListRoutesResponse(BaseModel):
    ok: bool = True
    routes: list[RouteOut]
    next: Optional[str] = None


class DumpResponse(BaseModel):
    routes: list[RouteOut]
