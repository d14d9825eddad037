"""
Data provider client for the Streamlit frontend.

Provides a high-level interface for the provider's read endpoints: outlines,
regulation pairs, annotations, and the climate report paragraph endpoints.

Every call has a bounded timeout and is retried once on connection errors
and gateway failures before a ProviderError is raised.
"""

from __future__ import annotations

import logging
from typing import Any

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from docdiff.config import get_settings
from docdiff.errors import ProviderError, ProviderNotFoundError

logger = logging.getLogger(__name__)

RETRY_STATUSES = (500, 502, 503, 504)


def _build_session(retries: int) -> requests.Session:
    retry = Retry(
        total=retries,
        connect=retries,
        read=retries,
        status=retries,
        backoff_factor=0.2,
        status_forcelist=RETRY_STATUSES,
        allowed_methods=frozenset({"GET"}),
        raise_on_status=False,
    )
    session = requests.Session()
    adapter = HTTPAdapter(max_retries=retry)
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    return session


class DocDiffClient:
    """Client for the comparison data provider."""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        retries: int | None = None,
        session: requests.Session | None = None,
    ):
        """Initialize the client.

        Args:
            base_url: Base URL of the provider, defaults to settings
            timeout: Per-request timeout in seconds, defaults to settings
            retries: Retries per request, defaults to settings (one)
            session: Preconfigured session, mainly for tests
        """
        settings = get_settings()
        self.base_url = (base_url or settings.api_base_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.request_timeout
        retries = retries if retries is not None else settings.request_retries
        self.session = session or _build_session(retries)

    def _get(self, endpoint: str, params: dict | None = None) -> Any:
        """Make a GET request and decode the JSON body."""
        url = f"{self.base_url}{endpoint}"
        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
        except requests.RequestException as e:
            logger.warning("GET %s failed: %s", endpoint, e)
            raise ProviderError(str(e), path=endpoint) from e

        if not response.ok:
            message = f"{response.status_code} {response.reason}: {response.text[:200]}"
            logger.warning("GET %s returned %s", endpoint, response.status_code)
            error_cls = ProviderNotFoundError if response.status_code == 404 else ProviderError
            raise error_cls(message, status_code=response.status_code, path=endpoint)

        try:
            return response.json()
        except ValueError as e:
            raise ProviderError(f"Invalid JSON from {endpoint}: {e}", path=endpoint) from e

    # =========================================================================
    # Regulations
    # =========================================================================

    def get_outline(self, jurisdiction: str) -> list[dict]:
        """Get the nested table of contents for one jurisdiction (e.g. "nsw")."""
        return self._get(f"/toc/{jurisdiction}")

    def get_regulation_pairs(self) -> list[dict]:
        """Get the complete provision pair list (all tiers, unfiltered)."""
        return self._get("/whs_pairs")

    def get_coloring(self) -> list[dict]:
        """Get per-provision annotated text (who/when/where/how/tone/penalty)."""
        return self._get("/whs_color")

    def get_comparisons(self) -> list[dict]:
        """Get free-text comparison notes for provision pairs."""
        return self._get("/comparisons")

    # =========================================================================
    # Climate reports
    # =========================================================================

    def get_paragraphs(self, document: str) -> list[dict]:
        """Get the ordered paragraph list of one report."""
        return self._get(f"/api/paragraphs/{document}")

    def get_pair_counts(self, document: str) -> dict[str, int]:
        """Get precomputed pair counts keyed by paragraph id."""
        return self._get(f"/api/pair_counts/{document}")

    def get_paragraph_pairs(
        self,
        document: str,
        para_id: str,
        size: int | None = None,
    ) -> list[dict]:
        """Look up the counterpart pairs of one paragraph.

        Args:
            document: Document token of the anchor paragraph
            para_id: Anchor paragraph id
            size: Maximum number of pairs, defaults to settings

        Returns:
            List of pair dicts with text_a, text_b, similarity, d_4
        """
        params = {
            "doc": document,
            "para_id": para_id,
            "size": size or get_settings().pair_lookup_size,
        }
        return self._get("/api/pairs", params)


# Global client instance
_client: DocDiffClient | None = None


def get_docdiff_client(base_url: str | None = None) -> DocDiffClient:
    """Get or create the global provider client."""
    global _client
    if _client is None:
        _client = DocDiffClient(base_url)
    return _client


def reset_docdiff_client() -> None:
    """Reset the global provider client."""
    global _client
    _client = None
