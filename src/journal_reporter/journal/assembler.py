"""
journal.assembler — Decide which problem fields become journal records.

Builds the mandatory ``MESSAGE`` / ``MESSAGE_ID`` / ``PRIORITY`` /
``PROBLEM_REPORT`` records and mirrors a dump-mode dependent subset of
the problem data under the ``PROBLEM_`` prefix.  Pure: no I/O.
"""

from __future__ import annotations

from typing import Iterable, Optional

from ..core.models import DumpMode, ProblemReport
from ..problem.data import ProblemData
from .buffer import RecordBuffer

DEFAULT_MESSAGE_ID = "1909f1302a5240c895d7c05566100dce"
PRIORITY_CRITICAL = "2"
FIELD_PREFIX = "PROBLEM_"

# Always mirrored unless every field is dumped.
DEFAULT_FIELDS: tuple[str, ...] = (
    "executable",
    "pid",
    "exception_type",
)

ESSENTIAL_FIELDS: tuple[str, ...] = (
    "reason",
    "crash_function",
    "cmdline",
    "component",
    "pkg_name",
    "pkg_version",
    "pkg_release",
    "pkg_fingerprint",
    "reported_to",
    "type",
    "uid",
)


def add_fields(buf: RecordBuffer, problem_data: ProblemData, fields: Iterable[str]) -> None:
    """Mirror every field of *fields* that has content in *problem_data*."""
    for name in fields:
        value = problem_data.get_content(name)
        if value is not None:
            buf.append(name, value, FIELD_PREFIX)


def add_text_fields(buf: RecordBuffer, problem_data: ProblemData) -> None:
    """Mirror every text item of *problem_data*, in store order.

    Items whose name cannot be a journal field name are skipped.
    """
    for name in problem_data.names():
        # "=" would end the journal field name early
        if "=" in name:
            continue
        item = problem_data.get_item(name)
        if item is not None and item.is_text:
            buf.append(name, item.content, FIELD_PREFIX)


def create_journal_message(
    problem_data: ProblemData,
    report: ProblemReport,
    message_id: Optional[str] = None,
    dump_mode: DumpMode = DumpMode.NONE,
) -> RecordBuffer:
    """
    Assemble the records of one journal entry.

    The first four records are always ``MESSAGE``, ``MESSAGE_ID``,
    ``PRIORITY`` and ``PROBLEM_REPORT``, in that order.  In ``FULL``
    mode store fields named like a mandatory record are mirrored again
    under the prefix.
    """
    buf = RecordBuffer()

    buf.append("MESSAGE", report.summary)
    buf.append("MESSAGE_ID", message_id if message_id is not None else DEFAULT_MESSAGE_ID)
    buf.append("PRIORITY", PRIORITY_CRITICAL)

    # The description starts on its own line when the journal shows it
    description = f"\n{report.description}" if report.description is not None else ""
    buf.append("PROBLEM_REPORT", description)

    if dump_mode is DumpMode.FULL:
        add_text_fields(buf, problem_data)
    else:
        add_fields(buf, problem_data, DEFAULT_FIELDS)
        if dump_mode is DumpMode.ESSENTIAL:
            add_fields(buf, problem_data, ESSENTIAL_FIELDS)

    return buf
