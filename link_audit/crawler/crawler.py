# === FILE: link_audit/crawler/crawler.py ===
from __future__ import annotations

from typing import List, Optional, Set

from link_audit.crawler.fetcher import PageFetcher
from link_audit.crawler.link_extractor import extract_links
from link_audit.crawler.models import Link
from link_audit.errors import PageFetchError
from link_audit.logger import get_logger

__all__ = ("PageCrawler",)


class PageCrawler:
    """Fetches seed pages (each at most once per run) and extracts their links."""

    def __init__(self, fetcher: PageFetcher) -> None:
        self.fetcher = fetcher
        # keyed on the literal URL string, http://x and http://x/ are distinct
        self.processed: Set[str] = set()
        self.logger = get_logger("crawler")

    async def crawl_page(self, url: str) -> List[Link]:
        if url in self.processed:
            self.logger.info("Skipping already processed page: %s", url)
            return []

        self.logger.info("Crawling page: %s", url)
        html = await self._get_html(url)
        links = extract_links(html, url)
        self.processed.add(url)
        self.logger.info("Found %d links on %s", len(links), url)
        return links

    async def _get_html(self, url: str) -> str:
        result = await self.fetcher.fetch(url)
        if not result.ok:
            message: Optional[str] = result.error or f"HTTP error! status: {result.status}"
            raise PageFetchError(url, message)
        return result.text

    def clear_processed(self) -> None:
        self.processed.clear()
        self.logger.debug("Processed pages cleared")
