"""Custom exception classes for the movie search service."""

from enum import StrEnum


class MovieSearchError(Exception):
    """Base exception for all movie search errors."""

    def __init__(self, message: str, details: dict | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class CatalogErrorKind(StrEnum):
    TRANSPORT = "transport"
    NOT_FOUND = "not_found"
    PARSE = "parse"
    REJECTED = "rejected"


class CatalogError(MovieSearchError):
    """A failed catalog lookup.

    The catalog client returns these inside a CatalogResult instead of raising
    them, so callers can branch on ``kind`` without try/except.
    """

    def __init__(
        self,
        kind: CatalogErrorKind,
        message: str,
        details: dict | None = None,
    ):
        self.kind = kind
        super().__init__(message, details)

    @property
    def is_not_found(self) -> bool:
        return self.kind == CatalogErrorKind.NOT_FOUND
