"""
Error taxonomy of the panel API and the handlers that render it.

Every failure reaches the client as ``{"error": message, "code": ClassName,
"details": {...}}`` with the status code carried by the exception class.
"""

import logging
from typing import Any, Dict, Optional

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class AppError(Exception):
    """Base class for all panel errors."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        self.message = message or self.default_message
        self.details = details or {}
        super().__init__(self.message)


class InvalidInputError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid input"


class UnauthorizedError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Authentication required"


class ForbiddenError(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Admin access required"


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class ConflictError(AppError):
    # The dashboard treats duplicates as a plain bad request
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Already exists"


class InternalError(AppError):
    pass


def _error_body(code: str, message: str, details: Dict[str, Any], path: str) -> Dict[str, Any]:
    return {"error": message, "code": code, "details": details, "path": path}


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(exc.__class__.__name__, exc.message, exc.details, request.url.path),
    )


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    fields = []
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ()) if part != "body"]
        fields.append({"field": ".".join(loc), "message": err.get("msg", "invalid value")})

    return JSONResponse(
        status_code=InvalidInputError.status_code,
        content=_error_body("InvalidInputError", "Invalid request data", {"fields": fields}, request.url.path),
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_body(
            "InternalError", "An unexpected error occurred. Please try again later.", {}, request.url.path
        ),
    )


def register_exception_handlers(app) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
