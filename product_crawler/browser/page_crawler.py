"""
Page Crawler

Loads a single page in headless Chromium (Playwright) and returns its
title, outbound links and body HTML.

Flow: launch browser -> navigate (load) -> wait for network idle
(soft timeout) -> read page data -> close browser.
"""

import logging
import time

from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError
from playwright.sync_api import sync_playwright

from ..common.config_loader import CrawlerSettings
from ..common.url_utils import filter_links
from ..models import PageData

logger = logging.getLogger(__name__)

# Runs in the page; returns plain data only
_PAGE_DATA_SCRIPT = """() => ({
    title: document.title,
    hrefs: Array.from(document.querySelectorAll('a')).map(a => a.href),
    bodyContent: document.body ? document.body.innerHTML : ''
})"""


class PageCrawlError(Exception):
    """The browser could not load or read the page."""


class PageCrawler:
    """
    Single-page crawler backed by Playwright.

    Usage:
        crawler = PageCrawler(settings)
        page_data = crawler.crawl("https://shop.example.com/product/1")
    """

    def __init__(self, settings: CrawlerSettings):
        self.settings = settings

    def _context_options(self) -> dict:
        s = self.settings
        return {
            "viewport": {"width": s.viewport_width, "height": s.viewport_height},
            "user_agent": s.user_agent,
            "locale": s.locale,
            "timezone_id": s.timezone_id,
            "java_script_enabled": True,
        }

    def crawl(self, url: str) -> PageData:
        """
        Crawl one page.

        Args:
            url: Absolute http(s) URL

        Returns:
            PageData with title, http(s) links and body HTML

        Raises:
            PageCrawlError: If the browser fails to launch, navigate or read the page
        """
        s = self.settings

        try:
            with sync_playwright() as p:
                browser = p.chromium.launch(headless=s.run_headless, args=list(s.launch_args))
                try:
                    context = browser.new_context(**self._context_options())
                    page = context.new_page()

                    logger.info("Crawling: %s", url)
                    page.goto(url, wait_until="load", timeout=s.navigation_timeout * 1000)
                    self._wait_for_network_idle(page)

                    raw = page.evaluate(_PAGE_DATA_SCRIPT) or {}
                    links = filter_links(raw.get("hrefs") or [])
                    logger.info("Found %d links on %s", len(links), url)

                    return PageData(
                        title=raw.get("title") or "",
                        links=links,
                        body_html=raw.get("bodyContent") or "",
                    )
                finally:
                    if s.is_development and s.dev_linger_seconds > 0:
                        logger.info("Waiting %.0f seconds before closing browser...",
                                    s.dev_linger_seconds)
                        time.sleep(s.dev_linger_seconds)
                    browser.close()
        except PlaywrightError as e:
            raise PageCrawlError(f"Failed to crawl {url}: {e}") from e

    def _wait_for_network_idle(self, page) -> None:
        """Wait for network idle; a timeout is logged and ignored."""
        timeout_ms = self.settings.network_idle_timeout * 1000
        try:
            page.wait_for_load_state("networkidle", timeout=timeout_ms)
            logger.debug("Network idle reached")
        except PlaywrightTimeoutError:
            logger.info("Network idle not reached within %.0f s, continuing",
                        self.settings.network_idle_timeout)
