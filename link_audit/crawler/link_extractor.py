# link_audit/crawler/link_extractor.py
"""
Anchor extraction for LinkAudit: one :class:`Link` per ``<a>`` element.
"""
from __future__ import annotations

from typing import List, Optional

from bs4 import BeautifulSoup
from bs4.element import Comment, NavigableString, Tag

from link_audit.crawler.models import Link
from link_audit.crawler.url_resolver import is_anchor_link, resolve_url
from link_audit.parser.html_parser import parse_html, text_of

# hrefs kept even when they resolve to nothing; judged as "empty" / "dummy"
_PLACEHOLDER_HREFS = ("", "#")


def _attr(tag: Tag, name: str) -> str:
    value = tag.get(name)
    if isinstance(value, list):
        value = " ".join(value)
    return (value or "").strip()


def _image_alts(anchor: Tag) -> List[str]:
    alts = []
    for img in anchor.find_all("img"):
        alt = _attr(img, "alt")
        if alt:
            alts.append(alt)
    return alts


def _direct_text(anchor: Tag) -> str:
    parts = [
        str(child).strip()
        for child in anchor.children
        if isinstance(child, NavigableString) and not isinstance(child, Comment)
    ]
    return " ".join(p for p in parts if p)


def link_text(anchor: Tag) -> str:
    """
    Effective text of an anchor: aria-label, title attribute, image alts,
    the anchor's own text nodes, then all of its descendant text.
    """
    aria = _attr(anchor, "aria-label")
    if aria:
        return aria
    title = _attr(anchor, "title")
    if title:
        return title
    alts = _image_alts(anchor)
    if alts:
        return " ".join(alts)
    direct = _direct_text(anchor)
    if direct:
        return direct
    return text_of(anchor)


def _build_link(anchor: Tag, base_url: str) -> Optional[Link]:
    raw = anchor.get("href")
    original_href = raw.strip() if isinstance(raw, str) else ""
    href = resolve_url(original_href, base_url)
    if not href and original_href not in _PLACEHOLDER_HREFS:
        return None

    parent = anchor.parent
    return Link(
        original_href=original_href,
        href=href,
        text=link_text(anchor),
        is_anchor=is_anchor_link(original_href, href),
        aria_label=_attr(anchor, "aria-label") or None,
        img_alts=_image_alts(anchor),
        html=str(anchor),
        parent_html=str(parent) if isinstance(parent, Tag) and not isinstance(parent, BeautifulSoup) else None,
    )


def extract_links(html: str, base_url: str) -> List[Link]:
    """
    Extract every anchor of *html* in document order, resolved against *base_url*.

    mailto:/tel:/javascript: links are dropped; empty and ``#`` hrefs are kept.
    No deduplication happens here.
    """
    soup = parse_html(html)
    links: List[Link] = []
    for tag in soup.find_all("a"):
        if not isinstance(tag, Tag):
            continue
        link = _build_link(tag, base_url)
        if link is not None:
            links.append(link)
    return links


__all__ = ["extract_links", "link_text"]
