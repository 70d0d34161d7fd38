"""
Domain exceptions for the photo shopping pipeline.
Endpoints translate these into HTTP errors.
"""

from enum import Enum


class InvalidCategoryError(ValueError):
    """Raised when a photo category is not one of the supported values."""


class BlobFetchError(IOError):
    """Raised when reading an uploaded blob from the blob store fails."""


class ShoppingQueryErrorKind(str, Enum):
    """Cause of a shopping provider failure."""
    INVALID_ARGUMENT = "invalid_argument"
    CONNECTION = "connection"
    IO = "io"


class ShoppingQueryError(Exception):
    """
    Single failure type for the shopping provider.

    The kind is kept for logging; callers answer every kind with HTTP 500.
    """

    def __init__(self, message: str, kind: ShoppingQueryErrorKind):
        super().__init__(message)
        self.kind = kind
