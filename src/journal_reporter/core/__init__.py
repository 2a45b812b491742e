"""
core — Configuration, console logging, errors and shared models.

Nothing in ``core`` imports from ``problem``, ``journal`` or ``cli``.
"""

from .config import Config, load_config
from .errors import JournalReporterError, JournalSendError, ProblemDataError, TemplateError
from .log import console, debug_print
from .models import DumpMode, ItemFlags, ProblemItem, ProblemReport

__all__ = [
    "Config",
    "load_config",
    "JournalReporterError",
    "JournalSendError",
    "ProblemDataError",
    "TemplateError",
    "console",
    "debug_print",
    "DumpMode",
    "ItemFlags",
    "ProblemItem",
    "ProblemReport",
]
