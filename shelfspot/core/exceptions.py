"""
Application Exception Handling

Single AppException class for all application errors with FastAPI integration.
"""

import logging
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException


logger = logging.getLogger(__name__)


class AppException(Exception):
    """
    Unified application exception for all error scenarios.

    Every error body has the shape {"message": ..., "code": ...} with an
    optional "details" object.

    Usage:
        raise AppException("Product not found", "PRODUCT_NOT_FOUND", 404)

    Error Codes:
        Catalog:
            - VALIDATION_ERROR (400)
            - PRODUCT_NOT_FOUND (404)
            - STORE_ERROR (500)

        Smart search:
            - SMART_SEARCH_FAILED (502)
            - SMART_SEARCH_UNAVAILABLE (503)

        General:
            - ENDPOINT_NOT_FOUND (404)
            - INTERNAL_ERROR (500)
    """

    def __init__(
        self,
        message: str,
        code: str,
        status_code: int = 400,
        details: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize application exception.

        Args:
            message: Human-readable error message
            code: Machine-readable error code (e.g., "PRODUCT_NOT_FOUND")
            status_code: HTTP status code (default: 400)
            details: Additional error context (optional)
        """
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for JSON response."""
        error_dict: Dict[str, Any] = {
            "message": self.message,
            "code": self.code,
        }

        if self.details:
            error_dict["details"] = self.details

        return error_dict


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Convert AppException to a JSON error response."""
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


async def request_validation_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """Report malformed request bodies as 400 with a readable message."""
    message = describe_validation_errors(exc.errors())
    logger.warning(f"Rejected {request.method} {request.url.path}: {message}")
    return await app_exception_handler(request, validation_error(message))


async def http_exception_handler(
    request: Request,
    exc: StarletteHTTPException
) -> JSONResponse:
    """Keep the framework's own HTTP errors in the application error shape."""
    if exc.status_code == 404:
        app_exc = endpoint_not_found(request.method, request.url.path)
    else:
        app_exc = AppException(str(exc.detail), "HTTP_ERROR", exc.status_code)
    return JSONResponse(
        status_code=app_exc.status_code,
        content=app_exc.to_dict(),
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log unexpected failures and answer with a generic 500."""
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return await app_exception_handler(request, internal_error())


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register all exception handlers with FastAPI app.

    Args:
        app: FastAPI application instance
    """
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)


def describe_validation_errors(errors: List[Dict[str, Any]]) -> str:
    """
    Build one message out of pydantic error entries.

    Missing fields are grouped ("Missing required fields: name, price");
    every other problem is listed per field.
    """
    missing: List[str] = []
    problems: List[str] = []

    for error in errors:
        loc = [str(part) for part in error.get("loc", ()) if part != "body"]
        field = ".".join(loc)

        if error.get("type") == "missing" and field:
            missing.append(field)
            continue

        if error.get("type") == "json_invalid":
            problems.append("Request body is not valid JSON")
            continue

        msg = str(error.get("msg", "invalid value"))
        if msg.startswith("Value error, "):
            msg = msg[len("Value error, "):]

        if not field:
            problems.append("Request body must be a JSON object with product fields")
        else:
            problems.append(f"{field}: {msg}")

    parts = []
    if missing:
        parts.append("Missing required fields: " + ", ".join(missing))
    parts.extend(problems)

    return "; ".join(parts) or "Invalid request"


# ============================================
# CONVENIENCE FACTORY FUNCTIONS
# ============================================

def validation_error(message: str, details: Optional[Dict[str, Any]] = None) -> AppException:
    """Create validation error exception."""
    return AppException(message, "VALIDATION_ERROR", 400, details)


def product_not_found(product_id: Optional[str] = None) -> AppException:
    """Create product not found exception."""
    details = {"product_id": product_id} if product_id else {}
    return AppException("Product not found", "PRODUCT_NOT_FOUND", 404, details)


def endpoint_not_found(method: str, path: str) -> AppException:
    """Create unknown endpoint exception."""
    return AppException(
        f"API endpoint not found: {method} {path}",
        "ENDPOINT_NOT_FOUND",
        404
    )


def store_error() -> AppException:
    """Create persistence failure exception. Details stay in the server log."""
    return AppException(
        "The product catalog is temporarily unavailable",
        "STORE_ERROR",
        500
    )


def smart_search_unavailable() -> AppException:
    """Create smart search not configured exception."""
    return AppException(
        "Smart search is not configured on this server",
        "SMART_SEARCH_UNAVAILABLE",
        503
    )


def smart_search_failed() -> AppException:
    """Create smart search upstream failure exception."""
    return AppException(
        "Smart search service did not return a usable answer",
        "SMART_SEARCH_FAILED",
        502
    )


def internal_error(message: str = "Internal server error") -> AppException:
    """Create internal server error exception."""
    return AppException(message, "INTERNAL_ERROR", 500)
