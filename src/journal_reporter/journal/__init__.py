"""
journal — Record buffer, record assembler and journal sinks.
"""

from .assembler import (
    DEFAULT_FIELDS,
    DEFAULT_MESSAGE_ID,
    ESSENTIAL_FIELDS,
    create_journal_message,
)
from .buffer import RecordBuffer, buffer_data, buffer_release, buffer_size
from .sink import ConsoleSink, JournalSink, NativeJournalSink

__all__ = [
    "DEFAULT_FIELDS",
    "DEFAULT_MESSAGE_ID",
    "ESSENTIAL_FIELDS",
    "create_journal_message",
    "RecordBuffer",
    "buffer_data",
    "buffer_release",
    "buffer_size",
    "ConsoleSink",
    "JournalSink",
    "NativeJournalSink",
]
