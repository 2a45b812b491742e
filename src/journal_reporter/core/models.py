"""
core.models — Shared data models for the reporter.

The problem-data store, the formatter and the record assembler all
speak in terms of these types.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntFlag
from typing import Optional

from pydantic import BaseModel


# ── Dump selector ─────────────────────────────────────────────────────


class DumpMode(str, Enum):
    """Which problem fields are mirrored into journal records."""

    NONE = "NONE"
    ESSENTIAL = "ESSENTIAL"
    FULL = "FULL"

    @classmethod
    def parse(cls, value: Optional[str]) -> DumpMode:
        """
        Parse a case-sensitive selector string.

        ``None`` and ``""`` select ``NONE``; anything else that is not
        one of the member values raises ``ValueError``.
        """
        if not value:
            return cls.NONE
        for member in cls:
            if member.value == value:
                return member
        raise ValueError(f"Parameter --dump takes NONE|ESSENTIAL|FULL values, got {value!r}")


# ── Problem items ─────────────────────────────────────────────────────


class ItemFlags(IntFlag):
    TEXT = 1 << 0
    BINARY = 1 << 1
    ONELINE = 1 << 2
    MULTILINE = 1 << 3
    EDITABLE = 1 << 4


@dataclass
class ProblemItem:
    """
    One field of a problem directory.

    For binary items ``content`` holds the path of the backing file,
    for text items it holds the text itself.
    """

    content: str
    flags: ItemFlags = ItemFlags.TEXT

    @property
    def is_text(self) -> bool:
        return bool(self.flags & ItemFlags.TEXT)

    @property
    def is_binary(self) -> bool:
        return bool(self.flags & ItemFlags.BINARY)

    @property
    def is_oneline(self) -> bool:
        return bool(self.flags & ItemFlags.ONELINE)

    @property
    def is_multiline(self) -> bool:
        return bool(self.flags & ItemFlags.MULTILINE)

    @property
    def editable(self) -> bool:
        return bool(self.flags & ItemFlags.EDITABLE)


# ── Rendered report ───────────────────────────────────────────────────


class ProblemReport(BaseModel):
    """Summary line and optional description rendered from a template."""

    summary: str = ""
    description: Optional[str] = None
