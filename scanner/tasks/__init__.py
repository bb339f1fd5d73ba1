"""Scan pipeline entry points."""

from scanner.tasks.scan import run_scan, score_site

__all__ = ["run_scan", "score_site"]
