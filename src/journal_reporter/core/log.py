"""
core.log — Console output for journal_reporter.

Provides a ``console`` (rich.Console) and ``debug_print`` helper
shared across all modules.
"""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape

console = Console(stderr=True, soft_wrap=True)


def debug_print(module: str, msg: str, *, enabled: bool = True) -> None:
    """Print a bracketed debug message to stderr."""
    if enabled:
        console.print(f"[dim]\\[DEBUG:{module}][/] {escape(msg)}", highlight=False)
