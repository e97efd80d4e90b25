# === FILE: link_audit/parser/html_parser.py ===
"""HTML parsing utilities for LinkAudit.

Everything here works on a :class:`bs4.BeautifulSoup` tree and only relies on
children / previous sibling / parent / attribute / tag name navigation:

* :func:`parse_html` — build the tree (``html.parser`` backend).
* :func:`document_title` — ``<title>`` text with whitespace collapsed.
* :func:`find_anchor_text` — representative text for an in-page fragment:
  the heading that introduces the element with the given id, or the start
  of its first paragraph / own text.
"""
from __future__ import annotations

import re
from collections.abc import Sequence
from typing import Optional

from bs4 import BeautifulSoup
from bs4.element import Tag

__all__: Sequence[str] = (
    "HEADING_RE",
    "parse_html",
    "document_title",
    "find_anchor_text",
    "truncate",
    "text_of",
)

HEADING_RE = re.compile(r"^h[1-6]$", re.IGNORECASE)
MAX_SNIPPET = 100


def parse_html(html: str) -> BeautifulSoup:
    return BeautifulSoup(html or "", "html.parser")


def text_of(tag: Tag) -> str:
    """Descendant text with whitespace runs collapsed."""
    return " ".join(tag.get_text(" ").split())


def truncate(text: str, limit: int = MAX_SNIPPET) -> str:
    return text[:limit] + "..." if len(text) > limit else text


def document_title(soup: BeautifulSoup) -> str:
    """Return the document title or ``""`` if absent."""
    title = soup.find("title")
    return text_of(title) if isinstance(title, Tag) else ""


def _is_heading(tag: object) -> bool:
    return isinstance(tag, Tag) and bool(HEADING_RE.match(tag.name or ""))


def _preceding_heading(element: Tag) -> Optional[Tag]:
    """Nearest heading before *element*, walking siblings then ancestors."""
    current: Optional[Tag] = element
    while current is not None:
        for sibling in current.find_previous_siblings():
            if _is_heading(sibling):
                return sibling
        parent = current.parent
        if parent is None or isinstance(parent, BeautifulSoup):
            return None
        if _is_heading(parent):
            return parent
        current = parent
    return None


def find_anchor_text(soup: BeautifulSoup, anchor_id: str) -> str:
    """Text describing the element whose id is *anchor_id*, ``""`` if none.

    Order: the element itself when it is a heading, the nearest preceding
    heading (siblings first, then up the ancestors), the first heading nested
    inside it, its first paragraph, then its own text. Paragraph and element
    text are cut to 100 characters.
    """
    if not anchor_id:
        return ""
    element = soup.find(id=anchor_id)
    if not isinstance(element, Tag):
        return ""

    if _is_heading(element):
        return text_of(element)

    heading = _preceding_heading(element)
    if heading is not None:
        return text_of(heading)

    nested = element.find(HEADING_RE)
    if isinstance(nested, Tag):
        return text_of(nested)

    paragraph = element.find("p")
    if isinstance(paragraph, Tag):
        return truncate(text_of(paragraph))

    return truncate(text_of(element))
