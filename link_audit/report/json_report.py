# link_audit/report/json_report.py

"""
Генерация JSON-отчёта для проекта LinkAudit.

Сериализация объекта AuditReport в файл.
"""
from pathlib import Path

from link_audit.aggregator import AuditReport


def render_json(report: AuditReport, output_path: Path | str, *, pretty: bool = True) -> Path:
    """
    Сохраняет отчёт report в формате JSON по указанному пути.

    :param report: объект AuditReport с результатами аудита
    :param output_path: путь к JSON-файлу
    :param pretty: отступ 2 пробела
    :return: Path сохранённого файла

    Пример:
    ```python
    from link_audit.report.json_report import render_json
    report_path = render_json(report, 'reports/links.json')
    print(f"JSON report saved to: {report_path}")
    ```
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(report.json(pretty=pretty), encoding="utf-8")
    return output
