class ProductAPIError(Exception):
    """Base class for errors raised by this package."""


class PayloadError(ProductAPIError):
    """Request data could not be decoded into a product or id."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class StoreError(ProductAPIError):
    """The backing store failed for a reason other than a missing record."""
