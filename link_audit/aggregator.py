# File: link_audit/aggregator.py
"""link_audit.aggregator: итоговый отчёт одного запуска аудита."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from link_audit.crawler.models import CheckResult


class RunState(str, Enum):
    """Состояния запуска: IDLE → RUNNING → COMPLETED | CANCELLED | FAILED."""

    IDLE = "idle"
    RUNNING = "running"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    FAILED = "failed"


@dataclass(slots=True)
class AuditReport:
    """Результаты аудита: записи по ссылкам и список ошибок (url, сообщение)."""

    state: RunState = RunState.IDLE
    results: List[CheckResult] = field(default_factory=list)
    errors: List[Tuple[str, str]] = field(default_factory=list)

    @property
    def issues(self) -> List[CheckResult]:
        """Записи с вердиктом, отличным от ``ok``."""
        return [r for r in self.results if r.judgment != "ok"]

    def error_summary(self) -> Optional[str]:
        """Одно сообщение со всеми ошибками или None, если их не было."""
        if not self.errors:
            return None
        lines = "\n".join(f"{url}: {message}" for url, message in self.errors)
        return f"Errors occurred while checking links:\n{lines}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "state": self.state.value,
            "results": [asdict(r) for r in self.results],
            "errors": [{"url": url, "error": message} for url, message in self.errors],
        }

    def json(self, *, pretty: bool = False) -> str:
        """Возвращает JSON-представление отчёта."""
        return json.dumps(self.to_dict(), ensure_ascii=False, indent=2 if pretty else None)


__all__ = ["RunState", "AuditReport"]
