"""link_audit.cancellation: cooperative cancellation for an audit run."""

from __future__ import annotations

import asyncio

from link_audit.errors import AuditCancelled


class CancelToken:
    """Checked before every delay and every network call of a run."""

    def __init__(self) -> None:
        self._event = asyncio.Event()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def cancel(self) -> None:
        self._event.set()

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise AuditCancelled("Link checking was cancelled")

    async def sleep(self, delay: float) -> None:
        """Wait *delay* seconds; raise :class:`AuditCancelled` as soon as the token is cancelled."""
        self.raise_if_cancelled()
        if delay <= 0:
            return
        try:
            await asyncio.wait_for(self._event.wait(), timeout=delay)
        except asyncio.TimeoutError:
            return
        self.raise_if_cancelled()


__all__ = ["CancelToken"]
