"""
journal.buffer — Growable buffer of raw journal records.

A record is a single ``KEY=value`` byte string.  The buffer owns every
record it builds and hands them to a sink in insertion order.  It knows
nothing about problem data.
"""

from __future__ import annotations

import string
from typing import List, Optional, Union

INITIAL_CAPACITY = 2
GROWTH_STEP = 5

Value = Union[str, bytes]

# Journal field names are ASCII; leave any other character alone
_ASCII_UPPER = str.maketrans(string.ascii_lowercase, string.ascii_uppercase)


def _to_bytes(value: Value) -> bytes:
    return value if isinstance(value, bytes) else value.encode("utf-8")


def format_record(key: str, value: Value, prefix: str = "") -> bytes:
    """
    Build ``UPPER(prefix + key)=value``.

    Only the field-name part is uppercased; the value is copied as is.
    """
    name = prefix + key
    if "=" in name:
        raise ValueError(f"Journal field name must not contain '=': {name!r}")
    return name.translate(_ASCII_UPPER).encode("utf-8") + b"=" + _to_bytes(value)


class RecordBuffer:
    """
    Ordered list of journal records with explicit capacity tracking.

    Storage starts with two slots and grows by five whenever it is
    full; typical entries carry fewer than twenty fields.

    Usage::

        buf = RecordBuffer()
        buf.append("MESSAGE", "crashed")
        sink.send(buf.data())
        buf.release()
    """

    def __init__(self) -> None:
        self._slots: List[Optional[bytes]] = [None] * INITIAL_CAPACITY
        self._count = 0

    @property
    def capacity(self) -> int:
        return len(self._slots)

    def __len__(self) -> int:
        return self._count

    def size(self) -> int:
        return self._count

    def append(self, key: str, value: Value, prefix: str = "") -> None:
        """Append ``UPPER(prefix + key)=value`` as the next record."""
        record = format_record(key, value, prefix)
        if self._count >= len(self._slots):
            self._slots.extend([None] * GROWTH_STEP)
        self._slots[self._count] = record
        self._count += 1

    def data(self) -> List[bytes]:
        """Return the held records in insertion order."""
        return list(self._slots[: self._count])  # type: ignore[arg-type]

    def release(self) -> int:
        """
        Drop every held record and the backing storage.

        Returns the number of records dropped; a second call drops
        nothing and returns 0.
        """
        released = 0
        for i in range(self._count):
            if self._slots[i] is not None:
                self._slots[i] = None
                released += 1
        self._slots = []
        self._count = 0
        return released


def create() -> RecordBuffer:
    return RecordBuffer()


def buffer_size(buf: Optional[RecordBuffer]) -> int:
    """Record count of *buf*; an absent buffer holds nothing."""
    if buf is None:
        return 0
    return buf.size()


def buffer_data(buf: Optional[RecordBuffer]) -> List[bytes]:
    if buf is None:
        return []
    return buf.data()


def buffer_release(buf: Optional[RecordBuffer]) -> int:
    if buf is None:
        return 0
    return buf.release()
