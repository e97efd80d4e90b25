# File: tests/test_cli.py
"""Тесты для CLI с использованием click.testing.CliRunner.
Проверяют команды `check`, `config`, `--version`, а также обработку ошибок.
"""
import importlib
import json
import types

import pytest
from click.testing import CliRunner
from link_audit.aggregator import AuditReport, RunState
from link_audit.cli import cli
from link_audit.crawler.models import CheckResult
from link_audit.errors import SeedValidationError
from link_audit.logger import configure
from link_audit.utils import parse_seed_urls

# the package re-exports the click group as `cli`, so fetch the module itself
cli_module = importlib.import_module("link_audit.cli")


def _result(**overrides):
    data = dict(
        found_on="https://example.com/",
        href="https://example.com/b",
        original_href="/b",
        status_code=200,
        link_text="Contact",
        title_or_text_node="Contact Us | Example",
        judgment="ok",
        is_anchor=False,
    )
    data.update(overrides)
    return CheckResult(**data)


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path, monkeypatch):
    """Без configs/default.yaml; логгер возвращается к исходной настройке после CliRunner."""
    monkeypatch.chdir(tmp_path)
    yield
    configure(level="WARNING")


class _Calls(list):
    pass


@pytest.fixture()
def audit(monkeypatch):
    calls = _Calls()
    calls.report = AuditReport(state=RunState.COMPLETED, results=[_result()])

    async def fake_run_audit(cfg, url_input, cancel=None):
        calls.append((cfg, url_input))
        if not parse_seed_urls(url_input):
            raise SeedValidationError("No valid URLs provided")
        return calls.report

    monkeypatch.setattr(cli_module, "run_audit", fake_run_audit)
    return calls


def test_audit_fixture_patches_cli_module(audit):
    assert isinstance(cli_module, types.ModuleType)
    result = CliRunner().invoke(cli, ["check", "https://example.com/"])
    assert result.exit_code == 0
    assert len(audit) == 1


def test_version_option():
    runner = CliRunner()
    result = runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert "LinkAudit" in result.output


def test_show_config(tmp_path):
    cfg_file = tmp_path / "audit.json"
    cfg_file.write_text(json.dumps({"request_delay": 0.25, "user_agent": "Agent/1.0"}), encoding="utf-8")

    runner = CliRunner()
    result = runner.invoke(cli, ["--config", str(cfg_file), "config"])
    assert result.exit_code == 0
    data = json.loads(result.output)
    assert data["request_delay"] == 0.25
    assert data["user_agent"] == "Agent/1.0"


def test_bad_config_exits(tmp_path):
    cfg_file = tmp_path / "audit.yaml"
    cfg_file.write_text("request_delay: -3", encoding="utf-8")
    result = CliRunner().invoke(cli, ["--config", str(cfg_file), "config"])
    assert result.exit_code == 1


def test_check_stdout(audit):
    result = CliRunner().invoke(cli, ["check", "https://example.com/"])
    assert result.exit_code == 0
    data = json.loads(result.output)
    assert data["state"] == "completed"
    assert data["results"][0]["judgment"] == "ok"
    assert data["results"][0]["title_or_text_node"] == "Contact Us | Example"
    assert audit[0][1] == "https://example.com/"


def test_check_reads_input_file_and_delay(audit, tmp_path):
    seeds = tmp_path / "seeds.txt"
    seeds.write_text("https://example.com/a\nhttps://example.com/b\n", encoding="utf-8")
    result = CliRunner().invoke(cli, ["check", "--input", str(seeds), "--delay", "0"])
    assert result.exit_code == 0
    cfg, url_input = audit[0]
    assert cfg.request_delay == 0
    assert parse_seed_urls(url_input) == ["https://example.com/a", "https://example.com/b"]


def test_check_stdin(audit):
    result = CliRunner().invoke(cli, ["check", "--input", "-"], input="https://example.com/x\n")
    assert result.exit_code == 0
    assert parse_seed_urls(audit[0][1]) == ["https://example.com/x"]


def test_check_json_file(audit, tmp_path):
    out = tmp_path / "reports" / "links.json"
    result = CliRunner().invoke(cli, ["check", "https://example.com/", "--json", str(out)])
    assert result.exit_code == 0
    assert f"JSON report: {out}" in result.output
    data = json.loads(out.read_text(encoding="utf-8"))
    assert data["results"][0]["href"] == "https://example.com/b"


def test_check_validation_error(audit):
    result = CliRunner().invoke(cli, ["check", "not-a-url"])
    assert result.exit_code == 1
    assert "No valid URLs provided" in result.output


def test_check_reports_error_summary(audit):
    audit.report = AuditReport(
        state=RunState.COMPLETED,
        results=[],
        errors=[("https://example.com/missing", "HTTP error! status: 404")],
    )
    result = CliRunner().invoke(cli, ["check", "https://example.com/missing"])
    assert result.exit_code == 0
    assert "https://example.com/missing: HTTP error! status: 404" in result.output


def test_check_cancelled_exit_code(audit):
    audit.report = AuditReport(state=RunState.CANCELLED, results=[_result()])
    result = CliRunner().invoke(cli, ["check", "https://example.com/"])
    assert result.exit_code == 130
    assert "cancelled" in result.output


def test_check_missing_input_file(audit, tmp_path):
    result = CliRunner().invoke(cli, ["check", "--input", str(tmp_path / "absent.txt")])
    assert result.exit_code == 2
    assert audit == []
