"""
cli — Typer CLI entry-point for journal_reporter.
"""

from .app import app, main, report_problem

__all__ = ["app", "main", "report_problem"]
