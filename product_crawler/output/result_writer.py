"""
Result Writer

Saves a crawled page's body HTML and its combined JSON record:

    <output_dir>/<hostname>-<timestamp>.html
    <output_dir>/<hostname>-<timestamp>-data.json

The timestamp is UTC ISO-8601 with colons replaced by hyphens,
e.g. 2026-10-18T09-15-02.123Z.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path

from ..common.url_utils import hostname_of
from ..models import PageResult

logger = logging.getLogger(__name__)


def run_timestamp(now: datetime | None = None) -> str:
    """Filename-safe UTC timestamp shared by all files of one run."""
    now = now or datetime.now(timezone.utc)
    iso = now.astimezone(timezone.utc).isoformat(timespec="milliseconds")
    return iso.replace("+00:00", "Z").replace(":", "-")


class ResultWriter:
    """Writes per-page output files into one directory."""

    def __init__(self, output_dir: str = "output"):
        self.output_dir = Path(output_dir)

    def _path_for(self, url: str, timestamp: str, suffix: str) -> Path:
        self.output_dir.mkdir(parents=True, exist_ok=True)
        hostname = hostname_of(url) or "page"
        return self.output_dir / f"{hostname}-{timestamp}{suffix}"

    def save_html(self, url: str, html: str, timestamp: str | None = None) -> Path:
        """
        Save body HTML.

        Args:
            url: Crawled URL (hostname is used in the filename)
            html: Body HTML
            timestamp: Run timestamp (generated if omitted)

        Returns:
            Path of the written file
        """
        path = self._path_for(url, timestamp or run_timestamp(), ".html")
        path.write_text(html, encoding="utf-8")
        logger.info("Body content saved to %s", path)
        return path

    def save_page_data(self, result: PageResult, timestamp: str | None = None) -> Path:
        """Save the combined JSON record for a page."""
        path = self._path_for(result.url, timestamp or run_timestamp(), "-data.json")
        with open(path, "w", encoding="utf-8") as f:
            json.dump(result.to_dict(), f, indent=2, ensure_ascii=False)
        logger.info("Page data saved to %s", path)
        return path
