# File: link_audit/utils.py
"""link_audit.utils: разбор списка стартовых URL и мелкие помощники для URL."""

from __future__ import annotations

from typing import List, Sequence
from urllib.parse import urlsplit

from link_audit.logger import logger

__all__: Sequence[str] = (
    "is_absolute_url",
    "parse_seed_urls",
)


def is_absolute_url(url: str) -> bool:
    """Проверяет, что строка — абсолютный URL со схемой и хостом."""
    try:
        parsed = urlsplit(url)
        return bool(parsed.scheme) and bool(parsed.netloc)
    except ValueError:
        return False


def parse_seed_urls(text: str) -> List[str]:
    """Разбирает список URL по строкам; нераспознанные строки молча отбрасываются.

    Порядок и написание URL сохраняются как есть.
    """
    urls: List[str] = []
    for line in text.splitlines():
        candidate = line.strip()
        if not candidate:
            continue
        if is_absolute_url(candidate):
            urls.append(candidate)
        else:
            logger.debug("Skipping unparsable seed line: %r", candidate)
    return urls

