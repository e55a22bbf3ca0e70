# app/core/errors.py
"""
Domain exceptions shared by the CRUD, aggregation and API layers.

The API layer maps them to status codes:
ValidationError -> 400, NotFoundError -> 404, StoreError -> 500.
"""


class TermTrendsError(Exception):
    """Base exception for term store and aggregation operations."""

    status_code = 500


class ValidationError(TermTrendsError):
    """Raised when caller input is missing or malformed."""

    status_code = 400


class NotFoundError(TermTrendsError):
    """Raised when a search term id does not exist."""

    status_code = 404


class StoreError(TermTrendsError):
    """Raised when the underlying database query or connection fails.

    The message is safe to return to callers; the original exception is
    chained for server-side logging.
    """

    status_code = 500
