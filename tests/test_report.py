# File: tests/test_report.py
import asyncio
import json

import pytest

from link_audit.aggregator import AuditReport, RunState
from link_audit.cancellation import CancelToken
from link_audit.crawler.models import CheckResult
from link_audit.errors import AuditCancelled
from link_audit.report import render_json


def _result(judgment):
    return CheckResult(
        found_on="https://example.com/",
        href="https://example.com/x",
        original_href="/x",
        status_code=200,
        link_text="X",
        title_or_text_node="Y",
        judgment=judgment,
        is_anchor=False,
    )


def test_error_summary():
    assert AuditReport().error_summary() is None
    report = AuditReport(errors=[("https://a.example/", "boom"), ("https://b.example/", "bang")])
    assert report.error_summary() == (
        "Errors occurred while checking links:\nhttps://a.example/: boom\nhttps://b.example/: bang"
    )


def test_issues_and_json():
    report = AuditReport(state=RunState.COMPLETED, results=[_result("ok"), _result("review")])
    assert [r.judgment for r in report.issues] == ["review"]
    data = json.loads(report.json())
    assert data["state"] == "completed"
    assert [r["judgment"] for r in data["results"]] == ["ok", "review"]
    assert data["errors"] == []


def test_render_json(tmp_path):
    report = AuditReport(state=RunState.CANCELLED, results=[_result("ok")], errors=[("u", "e")])
    path = render_json(report, tmp_path / "out" / "r.json")
    data = json.loads(path.read_text(encoding="utf-8"))
    assert data["state"] == "cancelled"
    assert data["errors"] == [{"url": "u", "error": "e"}]


@pytest.mark.asyncio()
async def test_cancel_token_sleep():
    token = CancelToken()
    await token.sleep(0)
    await token.sleep(0.01)
    asyncio.get_running_loop().call_later(0.01, token.cancel)
    with pytest.raises(AuditCancelled):
        await asyncio.wait_for(token.sleep(30), timeout=5)
    assert token.cancelled
    with pytest.raises(AuditCancelled):
        token.raise_if_cancelled()
