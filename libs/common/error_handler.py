"""Global exception handlers for consistent JSON error responses.

Usage:
    from libs.common.error_handler import add_exception_handlers

    app = FastAPI()
    add_exception_handlers(app)
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from libs.common.errors import LeagueError
from libs.common.logging import get_logger

logger = get_logger(__name__)


async def league_error_handler(request: Request, exc: LeagueError) -> JSONResponse:
    content = {"detail": exc.message, "code": exc.code}
    if exc.field:
        content["field"] = exc.field

    logger.info(
        "Domain error on %s %s: %s",
        request.method,
        request.url.path,
        exc.message,
        extra={"extra_fields": {"code": exc.code, "status_code": exc.status_code}},
    )
    return JSONResponse(status_code=exc.status_code, content=content)


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Malformed request bodies and parameters are reported as a single 400."""
    errors = exc.errors()
    messages = []
    field = None
    for err in errors:
        # Drop the "body" / "query" / "path" prefix FastAPI puts on every location.
        loc = [str(part) for part in err.get("loc", ())[1:]]
        if field is None and loc:
            field = loc[-1]
        messages.append(f"{'.'.join(loc)}: {err['msg']}" if loc else err["msg"])

    content = {"detail": "; ".join(messages), "code": "VALIDATION_FAILED"}
    if field:
        content["field"] = field

    logger.info(
        "Invalid request on %s %s: %s",
        request.method,
        request.url.path,
        content["detail"],
    )
    return JSONResponse(status_code=400, content=content)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(
        "Unhandled error on %s %s", request.method, request.url.path
    )
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error", "code": "INTERNAL_ERROR"},
    )


def add_exception_handlers(app: FastAPI) -> None:
    """Register domain and fallback exception handlers on the app."""
    app.add_exception_handler(LeagueError, league_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
