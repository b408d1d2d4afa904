"""Exchange rate exceptions."""


class ExternalRateFetchError(Exception):
    """Exchange rate provider could not deliver a usable rate table.

    Raised by the client and handled by falling back to static rates; it never
    reaches API callers.
    """

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason
