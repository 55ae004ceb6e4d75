# storefront/errors.py


class StorefrontError(Exception):
    """Base class for errors raised by the catalog, cart and checkout services."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(StorefrontError):
    """Malformed or missing input. Maps to HTTP 400."""


class NotFoundError(StorefrontError):
    """Unknown cart item or product identifier. Maps to HTTP 404."""


class CatalogUnavailableError(StorefrontError):
    """The catalog database failed while it was expected to be reachable."""
