# link_audit/crawler/url_resolver.py
"""
Turning raw ``href`` values into absolute, fetchable URLs.

An empty string is returned for hrefs that cannot be fetched
(``mailto:``, ``tel:``, ``javascript:``, malformed input).
"""
from __future__ import annotations

from urllib.parse import urldefrag, urljoin, urlsplit

from link_audit.logger import get_logger

logger = get_logger("resolver")

_UNRESOLVABLE_SCHEMES = ("mailto:", "tel:", "javascript:")


def resolve_url(href: str, base_url: str) -> str:
    """Resolve *href* found on *base_url*; ``""`` when it cannot be fetched."""
    lowered = href.lower()
    if lowered.startswith(("http://", "https://")):
        return href
    if lowered.startswith(_UNRESOLVABLE_SCHEMES):
        return ""
    try:
        base = urlsplit(base_url)
        if href.startswith("/") and not href.startswith("//"):
            if not base.scheme or not base.netloc:
                return ""
            return f"{base.scheme}://{base.netloc}{href}"
        if href.startswith("#"):
            return urldefrag(base_url)[0] + href
        return urljoin(base_url, href)
    except ValueError as exc:
        logger.debug("Cannot resolve %r against %s: %s", href, base_url, exc)
        return ""


def is_anchor_link(href: str, resolved: str) -> bool:
    """True when the link points at a fragment inside a document."""
    if href.startswith("#"):
        return True
    try:
        return bool(urlsplit(resolved).fragment)
    except ValueError:
        return False


__all__ = ["resolve_url", "is_anchor_link"]
