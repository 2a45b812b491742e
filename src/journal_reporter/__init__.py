"""
journal_reporter — Report problem directories to the systemd journal.

Architecture:
    core/     Configuration, logging, errors, shared models
    problem/  Problem-data store, directory loader, report formatter
    journal/  Record buffer, record assembler, journal sinks
    cli/      Typer CLI entry-point
"""

__version__ = "0.1.0"
