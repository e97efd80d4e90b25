# File: link_audit/checker/normalizer.py
"""link_audit.checker.normalizer: эвристики сравнения текста ссылки с текстом цели."""

from __future__ import annotations

import re
from typing import List, Sequence
from urllib.parse import urlsplit, urlunsplit

__all__: Sequence[str] = (
    "is_link_text_proper",
    "normalize_text",
    "strip_link_suffix",
    "strip_site_name",
    "split_scripts",
)

# Ａ-Ｚ, ａ-ｚ, ０-９ and the ideographic space
_FULLWIDTH = {code: code - 0xFEE0 for code in range(0xFF10, 0xFF1A)}
_FULLWIDTH.update({code: code - 0xFEE0 for code in range(0xFF21, 0xFF3B)})
_FULLWIDTH.update({code: code - 0xFEE0 for code in range(0xFF41, 0xFF5B)})
_FULLWIDTH[0x3000] = 0x20

_LINK_SUFFIX_RE = re.compile(r"(?:\s*(?:一覧|トップ)|\s*\b(?:top|index|list))\s*$", re.IGNORECASE)
_SITE_NAME_RE = re.compile(r"\s*[|｜]\s*.*$|\s+[-–—]\s+.*$", re.DOTALL)
_SCRIPT_RUN_RE = re.compile(r"[a-z0-9]+|[^a-z0-9]+")


def normalize_text(text: str) -> str:
    """Fold full-width characters, collapse whitespace, lowercase and trim."""
    folded = text.translate(_FULLWIDTH)
    return " ".join(folded.split()).lower()


def strip_link_suffix(text: str) -> str:
    """Drop a trailing "一覧" / "トップ" / "top" / "index" / "list"; never strip to empty."""
    stripped = _LINK_SUFFIX_RE.sub("", text.translate(_FULLWIDTH))
    return stripped if stripped.strip() else text


def strip_site_name(text: str) -> str:
    """Drop a trailing `` | Site`` / `` - Site`` segment; never strip to empty."""
    stripped = _SITE_NAME_RE.sub("", text, count=1)
    return stripped if stripped.strip() else text


def split_scripts(text: str) -> List[str]:
    """Split into alternating ASCII-alphanumeric and other runs."""
    runs = (run.strip() for run in _SCRIPT_RUN_RE.findall(text))
    return [run for run in runs if run]


def _is_self_url(text: str) -> bool:
    candidate = text.strip()
    try:
        parts = urlsplit(candidate)
    except ValueError:
        return False
    if not parts.scheme or not parts.netloc:
        return False
    return urlunsplit(parts) == candidate


def is_link_text_proper(link_text: str, target_text: str) -> bool:
    """Decide if *link_text* plausibly describes a page whose text is *target_text*."""
    if not link_text or not link_text.strip() or not target_text or not target_text.strip():
        return False

    if _is_self_url(link_text):
        return True

    link = normalize_text(strip_link_suffix(link_text))
    target = normalize_text(strip_site_name(target_text))

    if link == target or link in target or target in link:
        return True

    return any(len(run) >= 2 and run in target for run in split_scripts(link))
