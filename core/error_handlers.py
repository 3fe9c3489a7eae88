"""Error handlers for FastAPI application.

Provides consistent error formatting across all endpoints. Browsers posting
the questionnaire form receive an HTML error listing; API clients receive a
JSON error body.
"""

from fastapi import Request, status
from fastapi.responses import HTMLResponse, JSONResponse, Response
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import SQLAlchemyError
from core.exceptions import AppException, SubmissionValidationError
from core.logger import get_logger
from services.pages import render_errors
from typing import List, Optional

logger = get_logger("core.error_handlers")

_FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


def wants_html(request: Request) -> bool:
    """Return True when the caller is a browser form post or asks for HTML."""
    content_type = request.headers.get("content-type", "")
    if content_type.startswith(_FORM_CONTENT_TYPES):
        return True
    return "text/html" in request.headers.get("accept", "")


def create_error_response(
    message: str,
    status_code: int = 500,
    details: Optional[dict] = None,
    messages: Optional[List[str]] = None,
    as_html: bool = False,
) -> Response:
    """Create a standardized error response.

    Args:
        message: Error message.
        status_code: HTTP status code.
        details: Optional error details dictionary.
        messages: Human-readable messages listed on the HTML page. Defaults
            to ``[message]``.
        as_html: Render an HTML error listing instead of JSON.

    Returns:
        HTMLResponse or JSONResponse with error details.
    """
    if as_html:
        return HTMLResponse(render_errors(messages or [message]), status_code=status_code)

    error_body = {
        "error": {
            "message": message,
            "status_code": status_code,
        }
    }
    if details:
        error_body["error"]["details"] = details

    return JSONResponse(status_code=status_code, content=error_body)


async def app_exception_handler(request: Request, exc: AppException) -> Response:
    """Handle custom application exceptions."""
    logger.warning(
        "Application error: %s [%s %s]",
        exc.message,
        request.method,
        request.url.path
    )

    messages = exc.messages if isinstance(exc, SubmissionValidationError) else [exc.message]
    return create_error_response(
        message=exc.message,
        status_code=exc.status_code,
        details=exc.details,
        messages=messages,
        as_html=wants_html(request),
    )


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """Handle request parsing errors raised by FastAPI (bad path/query params)."""
    errors = []
    for error in exc.errors():
        field = ".".join(str(loc) for loc in error["loc"])
        errors.append({
            "field": field,
            "message": error["msg"],
            "type": error["type"]
        })

    logger.warning(
        "Validation error on %s %s: %s",
        request.method,
        request.url.path,
        errors
    )

    return create_error_response(
        message="Validation error",
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        details={"validation_errors": errors}
    )


async def sqlalchemy_exception_handler(
    request: Request,
    exc: SQLAlchemyError
) -> Response:
    """Handle SQLAlchemy errors that escaped the service layer."""
    logger.error(
        "Database error on %s %s: %s",
        request.method,
        request.url.path,
        str(exc),
        exc_info=True
    )

    # Don't expose internal database errors to clients
    return create_error_response(
        message="A database error occurred",
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        details={"type": "database_error"},
        as_html=wants_html(request),
    )


async def generic_exception_handler(
    request: Request,
    exc: Exception
) -> Response:
    """Handle all unhandled exceptions."""
    logger.error(
        "Unhandled exception on %s %s: %s",
        request.method,
        request.url.path,
        str(exc),
        exc_info=True
    )

    return create_error_response(
        message="An internal server error occurred",
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        details={"type": "internal_error"},
        as_html=wants_html(request),
    )


def register_exception_handlers(app):
    """Register all exception handlers with the FastAPI app.

    Args:
        app: FastAPI application instance.
    """
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(SQLAlchemyError, sqlalchemy_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)

    logger.info("Exception handlers registered")
