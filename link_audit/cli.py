# === FILE: link_audit/cli.py ===
#!/usr/bin/env python3
"""
Точка входа для запуска аудита ссылок LinkAudit через командную строку.

Команды:
  check     Проверить ссылки на стартовых страницах и вывести/сохранить отчёт
  config    Показать текущую конфигурацию

Общие опции:
  --config PATH       Путь к YAML/JSON-конфигу (default: configs/default.yaml, если есть)
  --log-level LEVEL   Уровень логирования (DEBUG, INFO, ...)
  --log-file PATH     Файл для логов (stderr, если не указан)
  --log-format FORMAT Формат логирования

Команда check опции:
  URLS...             Стартовые страницы
  --input FILE        Файл со списком URL по одному на строку ("-" — stdin)
  --json PATH         Сохранить JSON-отчёт в файл
  --pretty            Преформатировать JSON-вывод (отступ 2)
  --delay SEC         Пауза между запросами (override request_delay)

Дополнительно:
  --version, -v       Показать версию LinkAudit

Пример:
  link-audit check https://example.com/ --json reports/links.json --delay 0.5
"""
import asyncio
import signal
import sys
from pathlib import Path

import click

from link_audit import __version__
from link_audit.cancellation import CancelToken
from link_audit.config import load_config
from link_audit.errors import SeedValidationError
from link_audit.logger import LOG_FORMAT, configure
from link_audit.aggregator import RunState
from link_audit.report.json_report import render_json
from link_audit.scanner import run_audit

CONTEXT_SETTINGS = dict(help_option_names=["--help", "-h"])
EXIT_CANCELLED = 130


def print_error(message: str, code: int = 1):
    click.secho(message, fg='red', err=True)
    sys.exit(code)


async def _run_with_sigint(cfg, url_input):
    """Запускает аудит; Ctrl+C отменяет его через CancelToken, а не убивает процесс."""
    cancel = CancelToken()
    loop = asyncio.get_running_loop()
    try:
        loop.add_signal_handler(signal.SIGINT, cancel.cancel)
        installed = True
    except (NotImplementedError, RuntimeError, ValueError):
        installed = False
    try:
        return await run_audit(cfg, url_input, cancel)
    finally:
        if installed:
            loop.remove_signal_handler(signal.SIGINT)


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='LinkAudit, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Путь к файлу конфигурации YAML/JSON.'
)
@click.option(
    '--log-level', 'log_level',
    default='INFO', show_default=True,
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
    help='Уровень логирования'
)
@click.option(
    '--log-file', 'log_file',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Путь к файлу логов (stderr, если не указан)'
)
@click.option(
    '--log-format', 'log_format',
    default=LOG_FORMAT,
    show_default=True,
    help='Строка формата для логов'
)
@click.pass_context
def cli(ctx, config_path, log_level, log_file, log_format):
    """Группа команд LinkAudit CLI."""
    configure(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format
    )
    try:
        cfg = load_config(config_path)
    except Exception as e:
        print_error(f'Ошибка загрузки конфигурации: {e}')
    ctx.ensure_object(dict)
    ctx.obj['config'] = cfg


@cli.command('check', context_settings=CONTEXT_SETTINGS)
@click.argument('urls', nargs=-1)
@click.option(
    '--input', '-i', 'input_file',
    default=None,
    type=click.File('r', encoding='utf-8'),
    help='Файл со списком URL ("-" — stdin)'
)
@click.option(
    '--json', '-j', 'json_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Сохранить JSON-отчёт в файл'
)
@click.option(
    '--pretty', is_flag=True,
    help='Преформатировать JSON-вывод (отступ 2)'
)
@click.option(
    '--delay', 'delay',
    type=click.FloatRange(min=0),
    default=None,
    help='Пауза между запросами, секунд (override request_delay)'
)
@click.pass_context
def check(ctx, urls, input_file, json_output, pretty, delay):
    """Проверить ссылки на стартовых страницах."""
    cfg = ctx.obj['config']
    if delay is not None:
        cfg = cfg.model_copy(update={'request_delay': delay})

    lines = list(urls)
    if input_file is not None:
        lines.append(input_file.read())
    url_input = '\n'.join(lines)

    try:
        report = asyncio.run(_run_with_sigint(cfg, url_input))
    except SeedValidationError as e:
        print_error(str(e))
    except Exception as e:
        print_error(f'Ошибка при проверке ссылок: {e}')

    if json_output:
        try:
            saved = render_json(report, json_output, pretty=pretty)
            click.echo(f'JSON report: {saved}')
        except Exception as e:
            print_error(f'Ошибка при сохранении JSON: {e}')
    else:
        click.echo(report.json(pretty=pretty))

    summary = report.error_summary()
    if summary:
        click.secho(summary, fg='yellow', err=True)

    if report.state is RunState.CANCELLED:
        print_error('Link checking was cancelled', EXIT_CANCELLED)


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Показать текущую конфигурацию в JSON."""
    cfg = ctx.obj['config']
    click.echo(cfg.model_dump_json(indent=2))


if __name__ == "__main__":
    cli()
