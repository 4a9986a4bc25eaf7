"""
Chart module for chart-resolver.

Components:
    - ChartInfo / load_entries: Chart entries read from a YAML file
    - EntryFix / apply_fixes: Corrections for known scraper mistakes
    - format_match_table / write_match_report: Match table report
"""

from chart_resolver.chart.entries import ChartInfo, load_entries
from chart_resolver.chart.fixes import DEFAULT_FIXES, EntryFix, apply_fixes
from chart_resolver.chart.report import format_match_table, write_match_report

__all__ = [
    "ChartInfo",
    "load_entries",
    "EntryFix",
    "DEFAULT_FIXES",
    "apply_fixes",
    "format_match_table",
    "write_match_report",
]
