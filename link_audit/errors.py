"""link_audit.errors: exception types raised by the audit pipeline."""

from __future__ import annotations


class LinkAuditError(Exception):
    """Base class for all LinkAudit errors."""


class SeedValidationError(LinkAuditError):
    """No usable seed URL was supplied; the run fails before any request."""


class PageFetchError(LinkAuditError):
    """A seed page could not be retrieved."""

    def __init__(self, url: str, message: str) -> None:
        super().__init__(message)
        self.url = url


class AuditCancelled(LinkAuditError):
    """The run was cancelled through its :class:`CancelToken`."""


__all__ = ["LinkAuditError", "SeedValidationError", "PageFetchError", "AuditCancelled"]
