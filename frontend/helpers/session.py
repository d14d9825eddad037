"""
Session bootstrap loading for the Streamlit pages.

Each page fetches its snapshots (outlines, pair lists, paragraphs) once per
visit. The fetches run concurrently; the first failure makes the whole load
fail, and a load whose abort signal was set before it finished is discarded
without being reported as an error.
"""

from __future__ import annotations

import asyncio
import logging
import threading
from dataclasses import dataclass, field
from typing import Any, Callable, MutableMapping

from docdiff.errors import ProviderError

logger = logging.getLogger(__name__)


@dataclass
class LoadResult:
    """Outcome of a bootstrap load."""

    data: dict[str, Any] = field(default_factory=dict)
    error: str | None = None
    aborted: bool = False

    @property
    def ok(self) -> bool:
        return self.error is None and not self.aborted


async def _gather(calls: dict[str, Callable[[], Any]]) -> dict[str, Any]:
    names = list(calls)
    tasks = [asyncio.to_thread(calls[name]) for name in names]
    results = await asyncio.gather(*tasks)
    return dict(zip(names, results))


def load_all(
    calls: dict[str, Callable[[], Any]],
    abort: threading.Event | None = None,
) -> LoadResult:
    """Run the bootstrap calls concurrently.

    Args:
        calls: Name -> zero-argument fetch callable
        abort: Signal set when the load has been superseded

    Returns:
        LoadResult with every result by name, an error message, or aborted
    """
    abort = abort or threading.Event()
    try:
        data = asyncio.run(_gather(calls))
    except ProviderError as e:
        if abort.is_set():
            return LoadResult(aborted=True)
        logger.error("Bootstrap load failed: %s", e)
        return LoadResult(error=str(e))

    if abort.is_set():
        logger.debug("Discarding superseded bootstrap load")
        return LoadResult(aborted=True)
    return LoadResult(data=data)


class PageSession:
    """Per-visit state for one page, kept in a session-state mapping.

    Navigating to another page ends the visit: the next visit starts from
    scratch and refetches, and any load still running for the old visit is
    aborted.
    """

    ACTIVE_KEY = "_active_page"
    ABORT_KEY = "_bootstrap_abort"

    def __init__(self, state: MutableMapping, page: str):
        self.state = state
        self.page = page

    @property
    def key(self) -> str:
        return f"_page_{self.page}"

    def begin(self) -> bool:
        """Start a visit if the page changed. Returns True on a fresh visit."""
        if self.state.get(self.ACTIVE_KEY) == self.page and self.key in self.state:
            return False
        previous = self.state.get(self.ABORT_KEY)
        if previous is not None:
            previous.set()
        for key in [k for k in self.state if str(k).startswith("_page_")]:
            del self.state[key]
        self.state[self.ACTIVE_KEY] = self.page
        self.state[self.ABORT_KEY] = threading.Event()
        self.state[self.key] = {}
        return True

    @property
    def store(self) -> dict:
        return self.state.setdefault(self.key, {})

    def load(self, calls: dict[str, Callable[[], Any]]) -> LoadResult:
        """Load once per visit; later reruns reuse the stored result."""
        result = self.store.get("load")
        if result is None or result.aborted:
            result = load_all(calls, self.state.get(self.ABORT_KEY))
            self.store["load"] = result
        return result
