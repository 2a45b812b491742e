"""
core.errors — Exception hierarchy.

Library code raises these; the CLI turns them into a red message
and a non-zero exit.  Contract violations inside the record core
raise plain ``ValueError`` instead.
"""

from __future__ import annotations


class JournalReporterError(Exception):
    """Base class for all recoverable reporter failures."""


class ProblemDataError(JournalReporterError):
    """The problem directory could not be loaded."""


class TemplateError(JournalReporterError):
    """A report template could not be parsed or rendered."""


class JournalSendError(JournalReporterError):
    """The journal refused or could not receive an entry."""
