"""
API error handling for consistent error responses across the application.

Every failure leaves the API as ``{"error_message": "..."}``.
"""

from typing import Any, Dict, Iterable

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.exceptions import AuctionError

INTERNAL_ERROR_MESSAGE = "Internal server error!"


def create_error_response(message: str) -> Dict[str, str]:
    """
    Create a standardized error body.
    """
    return {"error_message": message}


def flatten_validation_errors(errors: Iterable[Dict[str, Any]]) -> str:
    """Render pydantic errors as ``field: message`` pairs, dropping the ``body``/``query`` location prefix."""

    def flatten_error(err: Dict[str, Any]) -> str:
        location = [str(loc) for loc in err.get("loc", ()) if loc not in ("body", "query", "path", "header")]
        message = err.get("msg", "Validation error")
        return f"{'.'.join(location)}: {message}" if location else message

    return " | ".join(flatten_error(err) for err in errors)


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register exception handlers for the FastAPI application.
    """

    @app.exception_handler(AuctionError)
    async def auction_exception_handler(request: Request, exc: AuctionError) -> JSONResponse:
        """
        Handle business rule failures raised by the service layer.
        """
        logger.info(f"{type(exc).__name__} on {request.method} {request.url.path}: {exc.message}")
        return JSONResponse(status_code=exc.status_code, content=create_error_response(exc.message))

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        """
        Handle validation errors and return a standardized response.
        """
        logger.warning(f"Validation error: {exc.errors()}")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=create_error_response(flatten_validation_errors(exc.errors())),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        """
        Handle framework HTTP errors such as unknown routes.
        """
        return JSONResponse(
            status_code=exc.status_code,
            content=create_error_response(str(exc.detail)),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(SQLAlchemyError)
    async def sqlalchemy_exception_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
        """
        Handle storage errors without leaking details to the client.
        """
        logger.error(f"Database error: {str(exc)}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=create_error_response(INTERNAL_ERROR_MESSAGE),
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """
        Handle all other uncaught exceptions.
        """
        logger.exception(f"Unhandled exception: {str(exc)}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=create_error_response(INTERNAL_ERROR_MESSAGE),
        )
