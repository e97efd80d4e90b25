# File: tests/conftest.py
from typing import Dict, List, Union

import pytest

from link_audit.config import AuditConfig
from link_audit.crawler.models import FetchResult


class FakeFetcher:
    """
    In-memory page fetcher: maps URL -> HTML (status 200) or a FetchResult.
    Records every requested URL in ``calls``.
    """

    def __init__(self, pages: Dict[str, Union[str, FetchResult]]) -> None:
        self.pages = pages
        self.calls: List[str] = []

    async def fetch(self, url: str) -> FetchResult:
        self.calls.append(url)
        page = self.pages.get(url)
        if page is None:
            return FetchResult(ok=False, status=404, text="<title>Not Found</title>", final_url=url)
        if isinstance(page, FetchResult):
            return page
        return FetchResult(ok=True, status=200, text=page, final_url=url)


@pytest.fixture()
def fast_config() -> AuditConfig:
    """
    AuditConfig without inter-request delay.
    """
    return AuditConfig(request_delay=0, cache_ttl=60, timeout=2.0, user_agent="TestAgent/1.0")


@pytest.fixture()
def make_fetcher():
    """
    Factory for FakeFetcher instances.
    """
    return FakeFetcher


@pytest.fixture()
def transport_error() -> FetchResult:
    return FetchResult(ok=False, status=0, error="Cannot connect to host")
