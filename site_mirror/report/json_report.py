# site_mirror/report/json_report.py

"""
Генерация JSON-отчёта для проекта SiteMirror.

Сериализация итогов обхода (CrawlSummary) в файл.
"""
import json
from pathlib import Path
from typing import Any, Dict

from site_mirror.crawler.models import CrawlSummary


def summary_to_dict(summary: CrawlSummary) -> Dict[str, Any]:
    return {
        "seed": summary.seed,
        "iterations": summary.iterations,
        "pages_saved": summary.pages_saved,
        "elapsed": round(summary.elapsed, 3),
        "visited": sorted(summary.visited),
        "errors": [
            {"kind": err.kind, "url": err.url, "cause": str(err.cause)}
            for err in summary.errors
        ],
    }


def render_json(summary: CrawlSummary, output_path: Path | str, pretty: bool = True) -> Path:
    """
    Сохраняет итоги обхода в формате JSON по указанному пути.

    :param summary: объект CrawlSummary, возвращённый краулером
    :param output_path: путь к JSON-файлу
    :param pretty: отступ 2 пробела, если True
    :return: Path сохранённого файла

    Пример:
    ```python
    from site_mirror.report.json_report import render_json
    report_path = render_json(summary, 'reports/crawl.json')
    ```
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)

    with output.open("w", encoding="utf-8") as f:
        json.dump(summary_to_dict(summary), f, ensure_ascii=False, indent=2 if pretty else None)

    return output
