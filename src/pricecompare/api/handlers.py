"""Global exception handlers for FastAPI."""

import structlog
from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from pricecompare.store import PriceStoreError

from .exceptions import APIError, from_store_error
from .schemas import ErrorResponse

logger = structlog.get_logger()


def _api_error_response(request_id: str, exc: APIError) -> JSONResponse:
    # exc.detail is the dict built by APIError
    detail_str = None
    if isinstance(exc.detail, dict):
        detail_str = exc.detail.get("detail")
    elif isinstance(exc.detail, str):
        detail_str = exc.detail

    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(
            error=exc.message,
            detail=detail_str,
            code=exc.code,
            request_id=request_id,
        ).model_dump(),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register global exception handlers.

    Args:
        app: FastAPI application instance
    """

    @app.exception_handler(APIError)
    async def api_error_handler(
        request: Request,
        exc: APIError,
    ) -> JSONResponse:
        """Handle custom API errors."""
        request_id = getattr(request.state, "request_id", "unknown")

        logger.warning(
            "api_error",
            request_id=request_id,
            code=exc.code,
            message=exc.message,
            detail=exc.detail,
        )
        return _api_error_response(request_id, exc)

    @app.exception_handler(PriceStoreError)
    async def price_store_error_handler(
        request: Request,
        exc: PriceStoreError,
    ) -> JSONResponse:
        """Log store failures and degrade to an error response.

        Args:
            request: Request instance
            exc: Store error raised by PriceStore

        Returns:
            JSON error response (503 for backend failures, 502 for empty writes)
        """
        request_id = getattr(request.state, "request_id", "unknown")

        logger.error(
            "price_store_error",
            request_id=request_id,
            operation=exc.operation,
            error_type=type(exc).__name__,
            error=exc.message,
        )
        return _api_error_response(request_id, from_store_error(exc))

    @app.exception_handler(HTTPException)
    async def http_exception_handler(
        request: Request,
        exc: HTTPException,
    ) -> JSONResponse:
        """Handle HTTP exceptions."""
        request_id = getattr(request.state, "request_id", "unknown")

        logger.warning(
            "http_error",
            request_id=request_id,
            status_code=exc.status_code,
            detail=exc.detail,
        )

        return JSONResponse(
            status_code=exc.status_code,
            content=ErrorResponse(
                error=str(exc.detail),
                code=f"HTTP_{exc.status_code}",
                request_id=request_id,
            ).model_dump(),
            headers=exc.headers,
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        """Handle request validation errors.

        Args:
            request: Request instance
            exc: RequestValidationError

        Returns:
            JSON error response with validation details
        """
        request_id = getattr(request.state, "request_id", "unknown")

        errors = []
        for error in exc.errors():
            loc = ".".join(str(x) for x in error["loc"])
            errors.append(f"{loc}: {error['msg']}")

        logger.warning(
            "validation_error",
            request_id=request_id,
            errors=errors,
        )

        return JSONResponse(
            status_code=422,
            content=ErrorResponse(
                error="Validation error",
                detail="; ".join(errors),
                code="VALIDATION_ERROR",
                request_id=request_id,
            ).model_dump(),
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """Handle unhandled exceptions."""
        request_id = getattr(request.state, "request_id", "unknown")

        logger.exception(
            "unhandled_error",
            request_id=request_id,
            error_type=type(exc).__name__,
            error=str(exc),
        )

        return JSONResponse(
            status_code=500,
            content=ErrorResponse(
                error="Internal server error",
                detail=None,  # Don't expose internal details
                code="INTERNAL_ERROR",
                request_id=request_id,
            ).model_dump(),
        )
