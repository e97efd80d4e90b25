# === FILE: link_audit/scanner.py ===
"""
Модуль-обёртка для функции запуска аудита.
"""
from typing import Optional

from link_audit.aggregator import AuditReport
from link_audit.cancellation import CancelToken
from link_audit.config import AuditConfig
from link_audit.crawler.fetcher import AiohttpFetcher
from link_audit.engine import LinkAuditEngine


async def run_audit(
    cfg: AuditConfig, url_input: str, cancel: Optional[CancelToken] = None
) -> AuditReport:
    """
    Открывает HTTP-сессию, прогоняет аудит и возвращает AuditReport.

    Parameters
    ----------
    cfg : AuditConfig
        Конфигурация аудита.
    url_input : str
        Стартовые URL, по одному на строку.
    cancel : CancelToken, optional
        Токен отмены; без него запуск нельзя прервать.

    Raises
    ------
    SeedValidationError
        Если во входных данных нет ни одного корректного URL.
    """
    async with AiohttpFetcher(cfg) as fetcher:
        engine = LinkAuditEngine(cfg, fetcher)
        return await engine.run(url_input, cancel)

__all__ = ["run_audit"]
