# link_audit/crawler/models.py
"""
Data models for the LinkAudit pipeline.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(slots=True, frozen=True)
class Link:
    """One anchor found on a page, as extracted (never mutated afterwards)."""

    original_href: str
    href: str
    text: str
    is_anchor: bool = False
    aria_label: Optional[str] = None
    img_alts: List[str] = field(default_factory=list)
    html: str = ""
    parent_html: Optional[str] = None

    @property
    def dedup_key(self) -> str:
        """Visible text, or the raw markup when the anchor has no text."""
        return self.text if self.text else self.html


@dataclass(slots=True)
class FetchResult:
    """Response of the page fetcher; ``status == 0`` means transport failure."""

    ok: bool
    status: int
    text: str = ""
    redirected: bool = False
    final_url: str = ""
    error: Optional[str] = None


@dataclass(slots=True)
class CacheEntry:
    status: int
    title_or_text: str
    timestamp: float


@dataclass(slots=True, frozen=True)
class CheckResult:
    """Audit record for one (page, link) pair."""

    found_on: str
    href: str
    original_href: str
    status_code: int
    link_text: str
    title_or_text_node: str
    judgment: str
    is_anchor: bool
    html: str = ""
    parent_html: Optional[str] = None
    error: Optional[str] = None


__all__ = ["Link", "FetchResult", "CacheEntry", "CheckResult"]
