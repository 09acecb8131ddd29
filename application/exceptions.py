"""
Application-layer exceptions.

These exceptions are used across application and infrastructure layers.
"""


class RepositoryError(Exception):
    """Error reading or writing persistent storage.

    Raised by repository adapters when the backend call fails (network,
    permissions, constraint violations). "Not found" is not an error;
    repositories return None or False for it.
    """

    pass


class CatalogClientError(Exception):
    """Base exception for bulk exercise catalog errors."""

    pass


class CatalogUnavailableError(CatalogClientError):
    """Catalog host unreachable or timed out."""

    pass


class CatalogResponseError(CatalogClientError):
    """Catalog host answered with an error status or an unreadable body."""

    def __init__(self, message: str, status_code: int = 0):
        super().__init__(message)
        self.status_code = status_code


class TranslationError(Exception):
    """Translation could not be obtained."""

    pass
