# === FILE: site_mirror/cli.py ===
#!/usr/bin/env python3
"""
Точка входа для запуска зеркалирующего краулера SiteMirror через командную строку.

Команды:
  crawl     Обойти сайт начиная с seed URL и сохранить страницы на диск
  config    Показать текущую конфигурацию

Общие опции:
  --config PATH       Путь к YAML/JSON-конфигу (default: configs/default.yaml, если есть)
  --log-level LEVEL   Уровень логирования (DEBUG, INFO, ...)
  --log-file PATH     Файл для логов (только stdout, если не указан)
  --log-format FORMAT Формат логирования (e.g. "%(asctime)s %(levelname)s %(message)s")

Команда crawl опции:
  --seed URL          Переопределить seed_url
  --output DIR        Переопределить корневую папку зеркала
  --concurrency INT   Переопределить размер пула воркеров
  --json PATH         Сохранить JSON-отчёт об обходе в файл
  --pretty            Преформатировать JSON-отчёт (отступ 2)

Дополнительно:
  --version, -v       Показать версию SiteMirror

Пример:
  site-mirror --config configs/default.yaml crawl --output mirror --json crawl.json --pretty
"""
import asyncio
import json
import sys
from pathlib import Path

import click
from pydantic import ValidationError

from site_mirror import __version__
from site_mirror.config import load_config
from site_mirror.crawler.models import CrawlError
from site_mirror.engine import start_crawl
from site_mirror.logger import DEFAULT_FORMAT, init_logging
from site_mirror.report.json_report import render_json

CONTEXT_SETTINGS = dict(help_option_names=["--help", "-h"])


def print_error(message: str):
    click.secho(message, fg="red", err=True)
    sys.exit(1)


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, "--version", "-v", message="SiteMirror, version %(version)s")
@click.option(
    "--config", "-c", "config_path",
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Путь к файлу конфигурации YAML/JSON.",
)
@click.option(
    "--log-level", "log_level",
    default="INFO", show_default=True,
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]),
    help="Уровень логирования",
)
@click.option(
    "--log-file", "log_file",
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help="Путь к файлу логов (stdout, если не указан)",
)
@click.option(
    "--log-format", "log_format",
    default=DEFAULT_FORMAT,
    show_default=True,
    help="Строка формата для логов",
)
@click.pass_context
def cli(ctx, config_path, log_level, log_file, log_format):
    """Группа команд SiteMirror CLI."""
    init_logging(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format,
    )
    try:
        cfg = load_config(config_path)
    except (OSError, ValueError, TypeError, ValidationError) as e:
        print_error(f"Ошибка загрузки конфигурации: {e}")
    ctx.ensure_object(dict)
    ctx.obj["config"] = cfg


@cli.command("crawl", context_settings=CONTEXT_SETTINGS)
@click.option("--seed", "seed_url", default=None, help="Стартовый URL (override seed_url)")
@click.option(
    "--output", "-o", "output_dir",
    default=None,
    type=click.Path(file_okay=False, path_type=Path),
    help="Корневая папка зеркала (override output_dir)",
)
@click.option(
    "--concurrency", "-n", "concurrency",
    type=int,
    default=None,
    help="Размер пула воркеров (override concurrency)",
)
@click.option(
    "--json", "-j", "json_output",
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help="Сохранить JSON-отчёт об обходе в файл",
)
@click.option("--pretty", is_flag=True, help="Преформатировать JSON-отчёт (отступ 2)")
@click.pass_context
def crawl(ctx, seed_url, output_dir, concurrency, json_output, pretty):
    """Обойти сайт и сохранить страницы в папку зеркала."""
    cfg = ctx.obj["config"]
    overrides = {
        k: v
        for k, v in (("seed_url", seed_url), ("output_dir", output_dir), ("concurrency", concurrency))
        if v is not None
    }
    if overrides:
        try:
            cfg = type(cfg)(**{**cfg.model_dump(mode="json"), **overrides})
        except ValidationError as e:
            print_error(f"Некорректные параметры: {e}")

    click.echo(f"Starting crawl: {cfg.seed} -> {cfg.output_dir}")
    try:
        summary = asyncio.run(start_crawl(cfg))
    except CrawlError as e:
        print_error(f"Не удалось загрузить стартовую страницу: {e}")
    except Exception as e:
        print_error(f"Ошибка при обходе: {e}")

    click.echo(
        f"Done: {summary.pages_saved} pages saved, "
        f"{len(summary.errors)} errors, {summary.iterations} iterations"
    )

    if json_output:
        try:
            saved = render_json(summary, json_output, pretty=pretty)
            click.echo(f"JSON report: {saved}")
        except OSError as e:
            print_error(f"Ошибка при сохранении JSON: {e}")


@cli.command("config", context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Показать текущую конфигурацию в JSON."""
    cfg = ctx.obj["config"]
    click.echo(json.dumps(cfg.model_dump(mode="json"), ensure_ascii=False, indent=2))


if __name__ == "__main__":
    cli()
