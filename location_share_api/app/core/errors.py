"""
Error types and their HTTP rendering.

Services raise subclasses of ``LocationShareError`` for expected
conditions (unknown user, incomplete input).  Each carries the HTTP
status and the message returned to the client as ``{"msg": ...}``.
Anything else that escapes a handler is logged and rendered as a bare
500 so storage details never reach the client.
"""

import logging
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException


logger = logging.getLogger(__name__)


class LocationShareError(Exception):
    """Base class for expected API errors."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_msg: str = "Internal server error"

    def __init__(self, msg: Optional[str] = None):
        self.msg = msg or self.default_msg
        super().__init__(self.msg)

    def to_dict(self) -> dict:
        return {"msg": self.msg}


class NotFoundError(LocationShareError):
    """Raised when a user (by id or phone number) does not exist."""

    status_code = status.HTTP_404_NOT_FOUND
    default_msg = "Not found"


class InvalidInputError(LocationShareError):
    """Raised when a registration lacks a name or phone number."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_msg = "Invalid input"


class BadRequestError(LocationShareError):
    """Raised when a journey is started without start or end coordinates."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_msg = "Bad request"


class ConflictError(LocationShareError):
    """Raised when registering a phone number that is already taken."""

    status_code = status.HTTP_409_CONFLICT
    default_msg = "Conflict"


# =============================================================================
# Exception Handlers
# =============================================================================

async def location_share_exception_handler(request: Request, exc: LocationShareError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render routing errors as ``{msg}``.

    A method a path does not support counts as an unmatched route, so it
    answers 404 like an unknown path.
    """
    if exc.status_code in (status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED):
        return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"msg": "Not found"})
    return JSONResponse(
        status_code=exc.status_code,
        content={"msg": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed request bodies are reported as a plain 400."""
    logger.debug("Rejected request to %s: %s", request.url.path, exc.errors())
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"msg": "Bad request"})


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unexpected error while handling %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"msg": "Internal server error"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Attach all error renderers to ``app``."""
    app.add_exception_handler(LocationShareError, location_share_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
