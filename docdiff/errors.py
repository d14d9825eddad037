"""Errors raised when talking to the data provider."""

from __future__ import annotations


class ProviderError(Exception):
    """A required data provider call failed.

    Covers both transport failures (connection refused, timeout) and
    non-success HTTP statuses. ``status_code`` is None for transport failures.
    """

    def __init__(self, message: str, status_code: int | None = None, path: str | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.path = path


class ProviderNotFoundError(ProviderError):
    """The provider answered 404 for the requested resource."""
