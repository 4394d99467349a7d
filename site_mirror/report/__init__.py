# File: site_mirror/report/__init__.py
"""site_mirror.report: генерация отчётов об обходе, используемая CLI и тестами."""

from site_mirror.report.json_report import render_json, summary_to_dict

__all__ = ["render_json", "summary_to_dict"]
