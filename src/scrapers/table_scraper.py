# src/scrapers/table_scraper.py

"""Fetches the city/temperature table from the configured source page."""

import logging
from typing import Any

import cloudscraper  # type: ignore[import-untyped]
from bs4 import BeautifulSoup, Tag
from curl_cffi import requests as curl_requests

from src.config.settings import Settings
from src.models.errors import ExtractionFailed
from src.models.snapshot import Table


class TableScraper:
    """Scrape a two-column (label, measurement) table from a static page.

    The page is fetched as plain HTML: no scripts run and no images are
    requested.  ``curl_cffi`` impersonates a browser TLS fingerprint and
    ``cloudscraper`` is tried once if that fails.
    """

    def __init__(self, selector: str | None = None) -> None:
        self.logger = logging.getLogger("temp_snapshots.scraper")
        self.settings = Settings()
        self.selector = selector or self.settings.TABLE_SELECTOR
        self.session = curl_requests.Session(
            impersonate=self.settings.IMPERSONATE_BROWSER
        )
        self._request_timeout: int = self.settings.REQUEST_TIMEOUT

    def _fetch_html(self, url: str) -> str:
        """Return the page body, trying cloudscraper if curl_cffi fails."""
        headers = dict(self.settings.DEFAULT_HEADERS)
        try:
            resp = self.session.get(
                url, headers=headers, timeout=self._request_timeout,
            )
            if resp.status_code == 200:
                return str(resp.text)
            self.logger.warning(
                "HTTP %d from %s", resp.status_code, url,
            )
        except Exception as exc:
            self.logger.warning(
                "Request error for %s: %s", url, exc, exc_info=True,
            )

        self.logger.info("curl_cffi failed, falling back to cloudscraper")
        try:
            _cs: Any = cloudscraper
            scraper: Any = _cs.create_scraper()
            fallback_resp: Any = scraper.get(
                url, headers=headers, timeout=self._request_timeout,
            )
        except Exception as exc:
            raise ExtractionFailed(
                f"Source page unreachable: {exc}", {"url": url},
            ) from exc
        if fallback_resp.status_code != 200:
            raise ExtractionFailed(
                f"Source page returned HTTP {fallback_resp.status_code}",
                {"url": url},
            )
        return str(fallback_resp.text)

    @staticmethod
    def _cell_text(cell: Tag) -> str:
        return cell.get_text(" ", strip=True)

    def parse_table(self, html: str) -> Table:
        """Extract header + (label, measurement) rows from *html*."""
        soup = BeautifulSoup(html, "lxml")
        table = soup.select_one(self.selector)
        if table is None:
            raise ExtractionFailed(
                "Table selector not found",
                {"selector": self.selector},
            )

        label_col = self.settings.LABEL_COLUMN
        value_col = self.settings.MEASUREMENT_COLUMN
        result: Table = [list(self.settings.HEADER_ROW)]
        # First row of the source table is its own header
        for tr in table.find_all("tr")[1:]:
            cells = tr.find_all(["td", "th"], recursive=False)
            if len(cells) <= max(label_col, value_col):
                self.logger.debug(
                    "Skipped short row with %d cells", len(cells),
                )
                continue
            label = self._cell_text(cells[label_col]).replace("*", "")
            result.append(
                [label.strip(), self._cell_text(cells[value_col])]
            )

        self.logger.info("Extracted %d rows", len(result) - 1)
        return result

    def fetch_raw_table(self, url: str) -> Table:
        """Load *url* and return its raw table (header row first)."""
        self.logger.debug("Fetching %s", url)
        return self.parse_table(self._fetch_html(url))
