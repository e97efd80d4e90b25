# File: link_audit/engine.py
"""link_audit.engine: оркестрация аудита — страницы по очереди, ссылки по очереди.

Каждая стартовая страница загружается не более одного раза за запуск, каждая
пара (URL, ключ ссылки) проверяется один раз в пределах страницы, перед каждым
запросом выдерживается фиксированная пауза, отмена проверяется перед каждой
паузой и каждым сетевым вызовом.
"""

from __future__ import annotations

import time
from typing import AsyncIterator, Callable, Dict, List, Optional, Set, Tuple

from link_audit.aggregator import AuditReport, RunState
from link_audit.cancellation import CancelToken
from link_audit.checker.judgment import Verdict, judge_link
from link_audit.checker.link_checker import LinkChecker
from link_audit.config import AuditConfig
from link_audit.crawler.crawler import PageCrawler
from link_audit.crawler.fetcher import PageFetcher
from link_audit.crawler.models import CheckResult, Link
from link_audit.errors import AuditCancelled, SeedValidationError
from link_audit.logger import get_logger
from link_audit.utils import parse_seed_urls

logger = get_logger("engine")

__all__ = ["LinkAuditEngine"]

ResultCallback = Callable[[CheckResult], None]


class LinkAuditEngine:
    """Фасад для CLI и тестов: один объект — один запуск аудита."""

    def __init__(self, config: AuditConfig, fetcher: PageFetcher) -> None:
        self.config = config
        self.fetcher = fetcher
        self.state = RunState.IDLE
        self.errors: List[Tuple[str, str]] = []
        self.crawler = PageCrawler(fetcher)
        self.checker = LinkChecker(fetcher, ttl=config.cache_ttl)

    async def audit(
        self, url_input: str, cancel: Optional[CancelToken] = None
    ) -> AsyncIterator[CheckResult]:
        """Асинхронно выдаёт CheckResult по мере проверки ссылок."""
        cancel = cancel or CancelToken()
        self.errors = []
        seeds = parse_seed_urls(url_input)
        if not seeds:
            self.state = RunState.FAILED
            raise SeedValidationError("No valid URLs provided")

        self.state = RunState.RUNNING
        self.crawler = PageCrawler(self.fetcher)
        self.checker = LinkChecker(self.fetcher, ttl=self.config.cache_ttl)
        logger.info("Starting audit of %d page(s)", len(seeds))
        try:
            for page_url in seeds:
                links = await self._crawl(page_url, cancel)
                processed: Dict[str, Set[str]] = {}
                for link in links:
                    result = await self._check(link, page_url, processed, cancel)
                    if result is not None:
                        yield result
            self.state = RunState.COMPLETED
        except AuditCancelled:
            self.state = RunState.CANCELLED
            logger.warning("Audit cancelled")
            raise
        except Exception:
            self.state = RunState.FAILED
            raise
        finally:
            if self.state is RunState.RUNNING:
                # consumer closed the generator before the last seed
                self.state = RunState.CANCELLED
            self.crawler.clear_processed()
        logger.info("Audit completed with %d error(s)", len(self.errors))

    async def run(
        self,
        url_input: str,
        cancel: Optional[CancelToken] = None,
        on_result: Optional[ResultCallback] = None,
    ) -> AuditReport:
        """Прогоняет весь аудит и собирает AuditReport (в т.ч. частичный при отмене)."""
        report = AuditReport()
        start = time.monotonic()
        try:
            async for result in self.audit(url_input, cancel):
                report.results.append(result)
                if on_result is not None:
                    on_result(result)
        except AuditCancelled:
            pass
        report.state = self.state
        report.errors = list(self.errors)
        logger.info(
            "Checked %d link(s) in %.2f s, state=%s",
            len(report.results),
            time.monotonic() - start,
            report.state.value,
        )
        return report

    async def _crawl(self, page_url: str, cancel: CancelToken) -> List[Link]:
        await cancel.sleep(self.config.request_delay)
        cancel.raise_if_cancelled()
        try:
            return await self.crawler.crawl_page(page_url)
        except AuditCancelled:
            raise
        except Exception as exc:
            logger.error("Page %s failed: %s", page_url, exc)
            self.errors.append((page_url, str(exc)))
            return []

    async def _check(
        self,
        link: Link,
        page_url: str,
        processed: Dict[str, Set[str]],
        cancel: CancelToken,
    ) -> Optional[CheckResult]:
        cancel.raise_if_cancelled()
        seen = processed.setdefault(link.href, set())
        if link.dedup_key in seen:
            return None
        seen.add(link.dedup_key)

        error: Optional[str] = None
        if not link.href:
            # unresolvable placeholder hrefs are judged without a request
            status_code, title_or_text = 0, ""
        else:
            await cancel.sleep(self.config.request_delay)
            try:
                status_code, title_or_text = await self.checker.check_link(link.href, cancel)
            except AuditCancelled:
                raise
            except Exception as exc:
                logger.error("Link %s failed: %s", link.href, exc)
                self.errors.append((link.href, str(exc)))
                status_code, title_or_text, error = 0, "", str(exc)
            cancel.raise_if_cancelled()

        if error is not None:
            judgment = Verdict.ERROR
        else:
            judgment = judge_link(
                link.text, title_or_text, status_code, link.original_href, link.href, page_url
            )
        logger.debug("%s -> %s (%s)", link.href, judgment.value, status_code)
        return CheckResult(
            found_on=page_url,
            href=link.href,
            original_href=link.original_href,
            status_code=status_code,
            link_text=link.text,
            title_or_text_node=title_or_text,
            judgment=judgment.value,
            is_anchor=link.is_anchor,
            html=link.html,
            parent_html=link.parent_html,
            error=error,
        )
