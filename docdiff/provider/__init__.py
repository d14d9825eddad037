"""Fixture-backed data provider for local development."""

from .routes import router, get_store
from .service import FixtureStore, FixtureNotFoundError

__all__ = [
    "router",
    "get_store",
    "FixtureStore",
    "FixtureNotFoundError",
]
