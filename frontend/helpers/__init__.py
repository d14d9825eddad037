"""Frontend helpers package."""

from frontend.helpers.docdiff_client import (
    DocDiffClient,
    get_docdiff_client,
    reset_docdiff_client,
)
from frontend.helpers.session import (
    LoadResult,
    PageSession,
    load_all,
)

__all__ = [
    "DocDiffClient",
    "get_docdiff_client",
    "reset_docdiff_client",
    "LoadResult",
    "PageSession",
    "load_all",
]
