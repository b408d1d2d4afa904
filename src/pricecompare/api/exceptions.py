"""Custom exceptions for API layer."""

from fastapi import HTTPException

from pricecompare.store import DataAccessError, EmptyResultError, PriceStoreError


class APIError(HTTPException):
    """Base exception for API errors.

    Extends HTTPException for native FastAPI integration.
    """

    def __init__(
        self,
        message: str,
        code: str,
        status_code: int = 400,
        detail: str | None = None,
    ) -> None:
        """Initialize API error.

        Args:
            message: Error message
            code: Error code
            status_code: HTTP status code
            detail: Additional detail information
        """
        super().__init__(
            status_code=status_code,
            detail={"message": message, "code": code, "detail": detail},
        )
        self.message = message
        self.code = code


class ServiceUnavailableError(APIError):
    """Backend unavailable error."""

    def __init__(
        self,
        service: str,
        detail: str | None = None,
    ) -> None:
        """Initialize service unavailable error.

        Args:
            service: Service name
            detail: Additional detail
        """
        super().__init__(
            message=f"{service} service unavailable",
            code="SERVICE_UNAVAILABLE",
            status_code=503,
            detail=detail,
        )


class EmptyWriteResultError(APIError):
    """Backend accepted a write but returned no row."""

    def __init__(self, detail: str | None = None) -> None:
        """Initialize empty write result error.

        Args:
            detail: Additional detail
        """
        super().__init__(
            message="Write returned no data",
            code="EMPTY_RESULT",
            status_code=502,
            detail=detail,
        )


def from_store_error(exc: PriceStoreError) -> APIError:
    """Translate a price store error into its API error."""
    if isinstance(exc, EmptyResultError):
        return EmptyWriteResultError(detail=exc.message)
    if isinstance(exc, DataAccessError):
        return ServiceUnavailableError("Price store", detail=f"{exc.operation} failed")
    return APIError(message=exc.message, code="PRICE_STORE_ERROR", status_code=500)
