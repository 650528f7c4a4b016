"""
Error types and the FastAPI exception handlers that render them.

Every error reaches the client as ``{"error": <message>}``.
"""

import logging
from typing import Dict, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class InventoryError(Exception):
    """Base class for errors surfaced to API clients."""

    status_code = 500

    def __init__(self, message: str = "Internal server error"):
        super().__init__(message)
        self.message = message


class ValidationError(InventoryError):
    """A required field is missing or unusable."""

    status_code = 400


class NotFoundError(InventoryError):
    """No record for the id, or a referenced file is absent."""

    status_code = 404

    def __init__(self, message: str = "Not found"):
        super().__init__(message)


def error_response(
    status_code: int, message: str, headers: Optional[Dict[str, str]] = None
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code, content={"error": message}, headers=headers
    )


async def inventory_error_handler(request: Request, exc: InventoryError) -> JSONResponse:
    return error_response(exc.status_code, exc.message)


async def unsupported_route_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """
    Answer any request that matched no route+verb pair with 405.

    Starlette reports an unknown path as 404 and a known path with the
    wrong verb as 405; both collapse into the same response here.
    """
    if exc.status_code in (404, 405):
        logger.debug(f"Unsupported route: {request.method} {request.url.path}")
        return error_response(405, "Method not allowed", headers=exc.headers)
    return error_response(exc.status_code, str(exc.detail), headers=exc.headers)


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Malformed path ids look up nothing; anything else is a bad request."""
    errors = exc.errors()
    if any((error.get("loc") or ("",))[0] == "path" for error in errors):
        return error_response(404, "Not found")

    first = errors[0] if errors else {}
    field = ".".join(str(part) for part in first.get("loc", ())[1:])
    message = first.get("msg", "Invalid request")
    return error_response(400, f"{field}: {message}" if field else message)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(InventoryError, inventory_error_handler)
    app.add_exception_handler(StarletteHTTPException, unsupported_route_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
