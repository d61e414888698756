"""Domain error taxonomy.

Services raise these; the API layer maps each one to an HTTP status
and a ``{"message": ...}`` body in a single place (``api/errors.py``).
"""


class CatalogError(Exception):
    """Base class for catalog errors."""

    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(CatalogError):
    """A request is missing required data or carries invalid values."""

    status_code = 400


class NotFoundError(CatalogError):
    """The requested resource does not exist."""

    status_code = 404


class SourceError(CatalogError):
    """The collection source could not be read, parsed or written."""

    status_code = 500
