"""
Fixture store for the local data provider.

Serves the explorer's read endpoints from JSON files in a data directory:

    toc_<jurisdiction>.json     outline per jurisdiction
    whs_pairs.json              regulation similarity pairs
    whs_color.json              per-provision annotated text
    comparisons.json            comparison notes
    paragraphs_<doc>.json       paragraph list per climate report
    pair_counts_<doc>.json      para_id -> pair count
    pairs_<doc>.json            climate paragraph pairs anchored on <doc>

Files are read on each request; nothing derived is stored.
"""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

_TOKEN = re.compile(r"^[A-Za-z0-9_-]+$")


class FixtureNotFoundError(Exception):
    """No fixture file exists for the requested resource."""


class FixtureStore:
    """Reads provider fixtures from a directory."""

    def __init__(self, data_dir: str | Path):
        self.data_dir = Path(data_dir)

    def _load(self, name: str) -> Any:
        path = self.data_dir / f"{name}.json"
        if not path.is_file():
            raise FixtureNotFoundError(name)
        with path.open(encoding="utf-8") as f:
            return json.load(f)

    def _load_for(self, prefix: str, token: str) -> Any:
        if not _TOKEN.match(token or ""):
            raise FixtureNotFoundError(f"{prefix}_{token}")
        return self._load(f"{prefix}_{token.lower()}")

    # Regulations

    def outline(self, jurisdiction: str) -> list[dict]:
        return self._load_for("toc", jurisdiction)

    def regulation_pairs(self) -> list[dict]:
        return self._load("whs_pairs")

    def coloring(self) -> list[dict]:
        return self._load("whs_color")

    def comparisons(self) -> list[dict]:
        return self._load("comparisons")

    # Climate reports

    def paragraphs(self, document: str) -> list[dict]:
        return self._load_for("paragraphs", document)

    def pair_counts(self, document: str) -> dict[str, int]:
        return self._load_for("pair_counts", document)

    def paragraph_pairs(self, document: str, para_id: str, size: int) -> list[dict]:
        """Pairs anchored on one paragraph, best first, at most ``size``."""
        pairs = self._load_for("pairs", document)
        anchored = [p for p in pairs if para_id in (p.get("text_a"), p.get("text_b"))]
        anchored.sort(key=lambda p: p.get("similarity") or 0.0, reverse=True)
        logger.debug("Pair lookup %s/%s: %d of %d", document, para_id, len(anchored), len(pairs))
        return anchored[:size]
