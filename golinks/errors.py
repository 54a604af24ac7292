"""
Error types and their mapping onto HTTP responses.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class GolinksError(Exception):
    """Base class for service errors."""


class BackendError(GolinksError):
    """The route store failed while serving a request."""

    def __init__(self, name: str, cause: BaseException):
        super().__init__(f"route store failed for {name!r}: {cause!r}")
        self.name = name
        self.cause = cause


class LookupSaturatedError(GolinksError):
    """Every lookup worker is busy, most likely with hung store calls."""

    def __init__(self, max_workers: int):
        super().__init__(f"all {max_workers} lookup workers are busy")
        self.max_workers = max_workers


class InvalidNameError(GolinksError):
    def __init__(self, name: str):
        super().__init__(f"name cannot be used: {name!r}")
        self.name = name


class InvalidUrlError(GolinksError):
    def __init__(self, url: str):
        super().__init__(f"invalid URL: {url!r}")
        self.url = url


def _error_body(message: str) -> dict:
    return {"detail": message}


async def _handle_backend_error(request: Request, exc: BackendError) -> JSONResponse:
    logger.error(
        "backend failure on %s %s (name=%r): %r",
        request.method,
        request.url.path,
        exc.name,
        exc.cause,
    )
    return JSONResponse(status_code=500, content=_error_body("backend failure"))


async def _handle_invalid_name(
    request: Request, exc: InvalidNameError
) -> JSONResponse:
    return JSONResponse(status_code=400, content=_error_body("name cannot be used"))


async def _handle_invalid_url(request: Request, exc: InvalidUrlError) -> JSONResponse:
    return JSONResponse(status_code=400, content=_error_body("invalid URL"))


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(BackendError, _handle_backend_error)
    app.add_exception_handler(InvalidNameError, _handle_invalid_name)
    app.add_exception_handler(InvalidUrlError, _handle_invalid_url)
