# link_audit/checker/judgment.py
"""
Verdicts for audited links.
"""
from __future__ import annotations

from enum import Enum
from urllib.parse import urlsplit

from link_audit.checker.normalizer import is_link_text_proper


class Verdict(str, Enum):
    EMPTY = "empty"
    DUMMY = "dummy"
    OK = "ok"
    ERROR = "error"
    REVIEW = "review"

    def __str__(self) -> str:
        return self.value


def _is_back_to_top(resolved_url: str, found_on: str) -> bool:
    target = urlsplit(resolved_url)
    page = urlsplit(found_on)
    if target.fragment != "top":
        return False
    return (
        target.scheme.lower() == page.scheme.lower()
        and target.netloc.lower() == page.netloc.lower()
        and (target.path or "/") == (page.path or "/")
    )


def judge_link(
    link_text: str,
    title_or_text: str,
    status_code: int,
    original_href: str,
    resolved_url: str,
    found_on: str,
) -> Verdict:
    """
    Combine what is known about one link into a :class:`Verdict`.

    Precedence: empty href, ``#`` href, same-page ``#top``, HTTP status
    outside 2xx/3xx, then whether the link text matches the target text.
    """
    if original_href == "":
        return Verdict.EMPTY
    if original_href == "#":
        return Verdict.DUMMY

    try:
        if _is_back_to_top(resolved_url, found_on):
            return Verdict.OK
    except ValueError:
        pass

    if status_code < 200 or status_code >= 400:
        return Verdict.ERROR

    if not is_link_text_proper(link_text, title_or_text):
        return Verdict.REVIEW
    return Verdict.OK


__all__ = ["Verdict", "judge_link"]
