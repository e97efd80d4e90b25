"""link_audit.report: сохранение отчётов аудита."""

from link_audit.report.json_report import render_json

__all__ = ["render_json"]
