"""
Dependency wiring for the FastAPI app.
"""

from __future__ import annotations

import logging
import secrets
from typing import Optional

from fastapi import Depends, HTTPException, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from golinks.config import Settings
from golinks.db import InMemoryRouteStore, RouteStore, SqlRouteStore
from golinks.resolver import LookupExecutor

logger = logging.getLogger(__name__)

_bearer = HTTPBearer(auto_error=False)


def build_route_store(settings: Settings) -> RouteStore:
    """
    Pick the route store implementation described by ``settings``.
    """
    if settings.use_in_memory_backends or not settings.database_url:
        logger.info("using in-memory route store")
        return InMemoryRouteStore()
    return SqlRouteStore(settings.database_url)


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_route_store(request: Request) -> RouteStore:
    """
    Return the store the app was built with, so routes persist across requests.
    """
    return request.app.state.route_store


def get_lookup_executor(request: Request) -> LookupExecutor:
    return request.app.state.lookup_executor


def require_account(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer),
    settings: Settings = Depends(get_app_settings),
) -> None:
    """
    Gate a request on the configured API token.

    With no token configured every request is admitted; the real account
    check is expected to sit in front of the service.
    """
    if not settings.api_token:
        return
    if credentials is None or not secrets.compare_digest(
        credentials.credentials, settings.api_token
    ):
        raise HTTPException(
            status_code=401,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
