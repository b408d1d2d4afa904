"""Price store exceptions."""


class PriceStoreError(Exception):
    """Base class for price store failures.

    Attributes:
        operation: Store operation that failed (list_all, upsert, subscribe)
    """

    def __init__(self, operation: str, message: str) -> None:
        super().__init__(message)
        self.operation = operation
        self.message = message


class DataAccessError(PriceStoreError):
    """Backend call failed (network or server-side error)."""

    def __init__(self, operation: str, cause: BaseException | None = None) -> None:
        detail = f": {cause}" if cause is not None else ""
        super().__init__(operation, f"Price store {operation} failed{detail}")


class EmptyResultError(PriceStoreError):
    """Write reported success but returned no row."""

    def __init__(self, operation: str) -> None:
        super().__init__(operation, f"No data returned from {operation} operation")
