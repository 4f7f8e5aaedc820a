"""
Exception handlers for the FastAPI application.

Every error leaves the API as ``{"message": ..., "error": ...}`` with a 4xx/5xx
status.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .exceptions import (
    AssistantError,
    ExportError,
    InvalidResumeIdError,
    ResumeBuilderError,
    ResumeNotFoundError,
)

logger = logging.getLogger(__name__)

STATUS_MAP = {
    ResumeNotFoundError: status.HTTP_404_NOT_FOUND,
    InvalidResumeIdError: status.HTTP_400_BAD_REQUEST,
    AssistantError: status.HTTP_502_BAD_GATEWAY,
    ExportError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def error_body(message: str, error: str) -> dict:
    return {"message": message, "error": error}


async def resume_builder_exception_handler(request: Request, exc: ResumeBuilderError) -> JSONResponse:
    status_code = STATUS_MAP.get(type(exc), status.HTTP_500_INTERNAL_SERVER_ERROR)
    log = logger.error if status_code >= 500 else logger.info
    log("%s on %s %s: %s", type(exc).__name__, request.method, request.url.path, exc.message)
    return JSONResponse(status_code=status_code, content=error_body(exc.message, type(exc).__name__))


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    message = exc.detail if isinstance(exc.detail, str) else "Request failed"
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(message, f"HTTP {exc.status_code}"),
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    problems = []
    for err in exc.errors():
        # Drop the leading 'body'/'path' segment so the field name reads naturally
        loc = [str(part) for part in err.get("loc", ())[1:]]
        field = ".".join(loc) or "body"
        problems.append(f"{field}: {err.get('msg')}")
    message = "; ".join(problems) or "Invalid request"
    logger.info("Rejected request %s %s: %s", request.method, request.url.path, message)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body(message, "ValidationError"),
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "Unexpected exception on %s %s", request.method, request.url.path, exc_info=exc
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body("Internal server error", str(exc)),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ResumeBuilderError, resume_builder_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)
