# link_audit/crawler/fetcher.py
"""
Fetcher module: the HTTP boundary of the audit pipeline.

Every call returns a fresh :class:`FetchResult`; transport problems are
reported as ``status == 0`` with an ``error`` message instead of raising.
Redirects are followed by aiohttp, the terminal status/body is reported.
"""
from __future__ import annotations

import asyncio
import base64
from typing import Dict, Optional, Protocol, Sequence
from urllib.parse import urlsplit

from aiohttp import ClientError, ClientSession, ClientTimeout

from link_audit.config import AuditConfig
from link_audit.crawler.models import FetchResult
from link_audit.logger import get_logger

logger = get_logger("fetcher")

_TEXT_TYPES = ("html", "xml", "text", "json")


class PageFetcher(Protocol):
    """Anything able to turn an absolute URL into a :class:`FetchResult`."""

    async def fetch(self, url: str) -> FetchResult: ...


def origin_of(url: str) -> str:
    """Return ``scheme://host[:port]`` in lower case."""
    parts = urlsplit(url)
    return f"{parts.scheme.lower()}://{parts.netloc.lower()}"


class AiohttpFetcher:
    """Handles HTTP fetching with timeout, optional retries/backoff and per-origin auth."""

    RETRY_STATUS: Sequence[int] = tuple(range(500, 600)) + (429,)

    def __init__(self, config: AuditConfig, session: Optional[ClientSession] = None) -> None:
        self.config = config
        self.session = session
        self._owns_session = session is None
        self._auth: Dict[str, str] = {}
        self._cookies: Dict[str, Dict[str, str]] = {}
        for origin, cred in config.credentials.items():
            self.capture_session(
                origin, username=cred.username, password=cred.password, cookies=cred.cookies
            )

    async def __aenter__(self) -> AiohttpFetcher:
        if self.session is None:
            self.session = ClientSession(
                timeout=ClientTimeout(total=self.config.timeout),
                headers={"User-Agent": self.config.user_agent},
                raise_for_status=False,
            )
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self._owns_session and self.session and not self.session.closed:
            await self.session.close()
        if self._owns_session:
            self.session = None

    def capture_session(
        self,
        url: str,
        *,
        username: Optional[str] = None,
        password: Optional[str] = None,
        cookies: Optional[Dict[str, str]] = None,
    ) -> None:
        """Make later fetches to the origin of *url* carry Basic-Auth and/or cookies."""
        origin = origin_of(url)
        if username is not None:
            token = base64.b64encode(f"{username}:{password or ''}".encode("utf-8")).decode("ascii")
            self._auth[origin] = f"Basic {token}"
        if cookies:
            self._cookies.setdefault(origin, {}).update(cookies)
        logger.debug("Session registered for %s", origin)

    async def fetch(self, url: str) -> FetchResult:
        if not self.session:
            raise RuntimeError("Session not initialized")

        try:
            scheme = urlsplit(url).scheme.lower()
        except ValueError as exc:
            return FetchResult(ok=False, status=0, final_url=url, error=f"Invalid URL: {exc}")
        if scheme not in ("http", "https"):
            return FetchResult(ok=False, status=0, final_url=url, error=f"Unsupported protocol: {scheme}:")

        origin = origin_of(url)
        headers = {}
        if origin in self._auth:
            headers["Authorization"] = self._auth[origin]
        jar = self._cookies.get(origin)
        if jar:
            headers["Cookie"] = "; ".join(f"{k}={v}" for k, v in jar.items())

        attempts = 0
        while True:
            try:
                async with self.session.get(url, headers=headers) as resp:
                    if resp.status in self.RETRY_STATUS and attempts < self.config.retry_times:
                        raise ClientError(f"Retryable status {resp.status}")
                    ctype = resp.headers.get("Content-Type", "").lower()
                    text = ""
                    if not ctype or any(t in ctype for t in _TEXT_TYPES):
                        text = await resp.text(errors="replace")
                    return FetchResult(
                        ok=200 <= resp.status < 300,
                        status=resp.status,
                        text=text,
                        redirected=bool(resp.history),
                        final_url=str(resp.url),
                    )
            except asyncio.TimeoutError:
                # no retry on timeout
                logger.warning("Timeout fetching %s", url)
                return FetchResult(ok=False, status=0, final_url=url, error="Request timed out")
            except ClientError as exc:
                attempts += 1
                if attempts > self.config.retry_times:
                    logger.warning("Failed %s: %s", url, exc)
                    return FetchResult(ok=False, status=0, final_url=url, error=str(exc) or type(exc).__name__)
                await self._backoff(url, attempts)

    async def _backoff(self, url: str, attempts: int) -> None:
        # exponential backoff, cap at 60s
        delay = min(2**attempts, 60)
        logger.debug("Retry %d/%d for %s after %.2f s", attempts, self.config.retry_times, url, delay)
        await asyncio.sleep(delay)


__all__ = ["PageFetcher", "AiohttpFetcher", "origin_of"]
