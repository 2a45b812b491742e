"""
cli.app — Typer application: report a problem directory to the journal.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.markup import escape

from ..core.config import Config, load_config
from ..core.errors import JournalReporterError
from ..core.log import console, debug_print
from ..core.models import DumpMode, ProblemReport
from ..journal.assembler import create_journal_message
from ..journal.sink import ConsoleSink, JournalSink, NativeJournalSink
from ..problem.data import load_problem_data, prepare_for_journal
from ..problem.formatter import ProblemFormatter

app = typer.Typer(
    name="journal-reporter",
    help="Prints problem information to systemd-journal.",
    add_completion=False,
)


# ── Shared helpers ────────────────────────────────────────────────────


def _build_config(**cli_overrides: object) -> Config:
    """Build a ``Config`` from .env + CLI overrides; bad selectors exit 1."""
    try:
        return load_config(**cli_overrides)
    except ValueError as exc:
        console.print(f"[red]{escape(str(exc))}[/]")
        raise typer.Exit(1)


def _load_formatter(cfg: Config) -> ProblemFormatter:
    if cfg.format_file:
        return ProblemFormatter.from_file(cfg.format_file)
    return ProblemFormatter.default()


def _print_report(report: ProblemReport) -> None:
    console.print(f"Message: {report.summary}\n", markup=False, highlight=False, emoji=False)
    console.print(report.description or "", markup=False, highlight=False, emoji=False)


def report_problem(cfg: Config, sink: JournalSink) -> Optional[ProblemReport]:
    """
    Load, format and send one problem directory.

    Returns the rendered report, or ``None`` in debug mode where nothing
    is sent and the report is only printed.
    """
    verbose = cfg.verbose > 0
    problem_data = load_problem_data(
        cfg.problem_dir, max_text_size=cfg.max_text_size, verbose=cfg.verbose > 1
    )
    prepare_for_journal(problem_data)

    report = _load_formatter(cfg).generate_report(problem_data)

    if cfg.debug:
        _print_report(report)
        return None

    buf = create_journal_message(problem_data, report, cfg.message_id, cfg.dump)
    debug_print("journal", f"sending {buf.size()} fields ({cfg.dump.value})", enabled=verbose)
    try:
        sink.send(buf.data())
    finally:
        buf.release()
    return report


# ═════════════════════════════════════════════════════════════════════
#  Entry point
# ═════════════════════════════════════════════════════════════════════


@app.command()
def report(
    problem_dir: Optional[Path] = typer.Option(None, "--problem-dir", "-d", help="Problem directory"),
    message_id: Optional[str] = typer.Option(None, "--message-id", "-m", help="Catalog message id"),
    format_file: Optional[Path] = typer.Option(None, "--format-file", "-F", help="Formatting file for catalog message"),
    dump: Optional[str] = typer.Option(None, "--dump", "-p", help="Dump problem dir into systemd journal fields (NONE|ESSENTIAL|FULL)"),
    debug: bool = typer.Option(False, "--debug", "-D", help="Print the report instead of sending it"),
    print_only: bool = typer.Option(False, "--print", help="Print journal fields instead of sending them"),
    verbose: int = typer.Option(0, "--verbose", "-v", count=True, help="Be verbose (repeatable)"),
) -> None:
    """Report the problem directory DIR to the systemd journal."""
    dump_mode: Optional[DumpMode] = None
    if dump is not None:
        try:
            dump_mode = DumpMode.parse(dump)
        except ValueError:
            console.print("[red]Parameter --dump takes NONE|ESSENTIAL|FULL values[/]")
            raise typer.Exit(1)

    cfg = _build_config(
        problem_dir=problem_dir,
        message_id=message_id,
        format_file=format_file,
        dump=dump_mode,
        debug=debug or None,
        verbose=verbose or None,
    )

    sink: JournalSink = ConsoleSink() if print_only else NativeJournalSink(cfg.socket_path)
    try:
        report_problem(cfg, sink)
    except JournalReporterError as exc:
        console.print(f"[red]{escape(str(exc))}[/]")
        raise typer.Exit(1)


def main() -> None:
    """Entry-point registered in pyproject.toml."""
    app()
