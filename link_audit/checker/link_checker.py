# link_audit/checker/link_checker.py
"""
Status & title resolution with a per-instance TTL cache.

``check_link`` fetches the fragment-less document once and derives both the
status code and the representative text from that single response. The
standalone ``get_status_code`` / ``get_title_or_anchor_text`` each fetch on
their own. A fetcher that raises is treated like a transport failure.
"""
from __future__ import annotations

import asyncio
import time
from typing import Callable, Dict, Optional, Tuple
from urllib.parse import unquote, urldefrag

from link_audit.cancellation import CancelToken
from link_audit.crawler.fetcher import PageFetcher
from link_audit.crawler.models import CacheEntry, FetchResult
from link_audit.errors import AuditCancelled
from link_audit.logger import get_logger
from link_audit.parser.html_parser import document_title, find_anchor_text, parse_html

logger = get_logger("checker")

NO_TITLE = "No title found"
FETCH_ERROR = "Error fetching content"
DEFAULT_TTL = 60.0


def _split_fragment(url: str) -> Tuple[str, str]:
    base, fragment = urldefrag(url)
    return base, unquote(fragment)


def _is_http(url: str) -> bool:
    return url.lower().startswith(("http://", "https://"))


def extract_title_or_anchor_text(html: str, fragment: str) -> str:
    """Anchor text for *fragment* if it yields any, else the document title."""
    try:
        soup = parse_html(html)
        if fragment:
            text = find_anchor_text(soup, fragment)
            if text:
                return text
        return document_title(soup) or NO_TITLE
    except Exception as exc:  # pragma: no cover - html.parser is lenient
        logger.warning("HTML parsing failed: %s", exc)
        return FETCH_ERROR


class LinkChecker:
    """Resolves ``(status_code, title_or_text)`` for absolute URLs."""

    def __init__(
        self,
        fetcher: PageFetcher,
        ttl: float = DEFAULT_TTL,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.fetcher = fetcher
        self.ttl = ttl
        self._clock = clock
        self._cache: Dict[str, CacheEntry] = {}

    async def check_link(self, url: str, cancel: Optional[CancelToken] = None) -> Tuple[int, str]:
        now = self._clock()
        cached = self._cache.get(url)
        if cached is not None and now - cached.timestamp < self.ttl:
            logger.debug("Cache hit: %s", url)
            return cached.status, cached.title_or_text

        if cancel is not None:
            cancel.raise_if_cancelled()

        if not _is_http(url):
            status, title_or_text = 0, FETCH_ERROR
        else:
            base, fragment = _split_fragment(url)
            result = await self._fetch(base)
            status = result.status or 0
            title_or_text = self._text_from(result, fragment)

        self._cache[url] = CacheEntry(status=status, title_or_text=title_or_text, timestamp=now)
        return status, title_or_text

    async def get_status_code(self, url: str) -> int:
        if not _is_http(url):
            logger.debug("Unsupported protocol: %s", url)
            return 0
        base, _ = _split_fragment(url)
        result = await self._fetch(base)
        return result.status or 0

    async def get_title_or_anchor_text(self, url: str) -> str:
        if not _is_http(url):
            return FETCH_ERROR
        base, fragment = _split_fragment(url)
        result = await self._fetch(base)
        return self._text_from(result, fragment)

    async def _fetch(self, url: str) -> FetchResult:
        try:
            return await self.fetcher.fetch(url)
        except (AuditCancelled, asyncio.CancelledError):
            raise
        except Exception as exc:
            logger.warning("Fetch failed for %s: %s", url, exc)
            return FetchResult(ok=False, status=0, final_url=url, error=str(exc) or type(exc).__name__)

    @staticmethod
    def _text_from(result: FetchResult, fragment: str) -> str:
        if result.status == 0 or result.error:
            return FETCH_ERROR
        return extract_title_or_anchor_text(result.text, fragment)

    def clear_cache(self) -> None:
        self._cache.clear()


__all__ = ["LinkChecker", "extract_title_or_anchor_text", "NO_TITLE", "FETCH_ERROR"]
