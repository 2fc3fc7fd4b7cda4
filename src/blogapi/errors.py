"""Error taxonomy and the FastAPI handler that renders it.

Learn: Every failure a caller can observe maps to exactly one of these
classes. Services and auth code raise them; a single exception handler
turns them into `{"detail": ...}` JSON with the right status code.
Routes never build error responses by hand.

    Unauthenticated   401  no token / invalid token / token expired / user not found
    InvalidCredentials 401  login only, never says which half was wrong
    Forbidden         403  caller is not the owner
    PostNotFound      404  missing post, malformed id, or someone else's draft
    Conflict          409  username or email already taken
    ServerFault       500  anything unexpected; detail stays in the logs
"""

import enum

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

logger = structlog.get_logger()


class DenialReason(str, enum.Enum):
    """Why an authentication attempt did not attach an identity."""

    NO_TOKEN = "no token"
    INVALID_TOKEN = "invalid token"
    TOKEN_EXPIRED = "token expired"
    USER_NOT_FOUND = "user not found"


class BlogAPIError(Exception):
    """Base class for errors that are rendered as HTTP responses."""

    status_code: int = 500
    detail: str = "Server error"

    def __init__(self, detail: str | None = None):
        if detail is not None:
            self.detail = detail
        super().__init__(self.detail)

    @property
    def headers(self) -> dict[str, str] | None:
        return None


class Unauthenticated(BlogAPIError):
    status_code = 401

    def __init__(self, reason: DenialReason):
        self.reason = reason
        super().__init__(reason.value)

    @property
    def headers(self) -> dict[str, str]:
        return {"WWW-Authenticate": "Bearer"}


class InvalidCredentials(BlogAPIError):
    status_code = 401
    detail = "Invalid credentials"


class Forbidden(BlogAPIError):
    status_code = 403
    detail = "Access denied"


class PostNotFound(BlogAPIError):
    status_code = 404
    detail = "Post not found"


class Conflict(BlogAPIError):
    status_code = 409
    detail = "User already exists"


class ServerFault(BlogAPIError):
    status_code = 500
    detail = "Server error"


async def blogapi_error_handler(request: Request, exc: BlogAPIError) -> JSONResponse:
    """Render a BlogAPIError as JSON."""
    if exc.status_code >= 500:
        logger.error("request.server_fault", path=request.url.path, detail=exc.detail)
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail},
        headers=exc.headers,
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last resort: log the traceback, tell the caller nothing.

    Called from RequestIdMiddleware, so the response still carries
    X-Request-ID and the request is still logged as completed.
    """
    logger.error("request.unhandled_error", path=request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content={"detail": ServerFault.detail})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(BlogAPIError, blogapi_error_handler)
