"""
journal.sink — Commit a list of records as one journal entry.

``NativeJournalSink`` speaks the journald native protocol over its
datagram socket; one datagram is one entry, so the records of a call
are committed together or not at all.  Entries too large for one
datagram are written to a sealed memfd whose descriptor is sent instead,
which journald reads as the same entry.  ``ConsoleSink`` prints the
entry instead of sending it.
"""

from __future__ import annotations

import errno
import fcntl
import os
import socket
import struct
from typing import List, Optional, Protocol, Sequence

from rich.console import Console

from ..core.config import DEFAULT_SOCKET_PATH
from ..core.errors import JournalSendError


class JournalSink(Protocol):
    def send(self, records: Sequence[bytes]) -> None:
        ...


def serialize_records(records: Sequence[bytes]) -> bytes:
    """
    Encode *records* in the journald native datagram format.

    ``KEY=value\\n`` for single-line values, otherwise
    ``KEY\\n`` + little-endian 64-bit length + value + ``\\n``.
    """
    parts: List[bytes] = []
    for record in records:
        key, sep, value = record.partition(b"=")
        if not sep or not key:
            raise ValueError(f"Journal record has no field name: {record[:40]!r}")
        if b"\n" in value:
            parts.append(key + b"\n" + struct.pack("<Q", len(value)) + value + b"\n")
        else:
            parts.append(record + b"\n")
    return b"".join(parts)


class NativeJournalSink:
    """Send entries to journald through ``/run/systemd/journal/socket``."""

    def __init__(self, socket_path: str = DEFAULT_SOCKET_PATH) -> None:
        self.socket_path = socket_path

    def send(self, records: Sequence[bytes]) -> None:
        payload = serialize_records(records)
        sock = socket.socket(socket.AF_UNIX, socket.SOCK_DGRAM)
        try:
            try:
                sock.sendto(payload, self.socket_path)
            except OSError as exc:
                if exc.errno not in (errno.EMSGSIZE, errno.ENOBUFS):
                    raise
                self._send_memfd(sock, payload)
        except OSError as exc:
            raise JournalSendError(
                f"Can't send {len(records)} fields to journal at {self.socket_path}: {exc}"
            ) from exc
        finally:
            sock.close()

    def _send_memfd(self, sock: socket.socket, payload: bytes) -> None:
        fd = os.memfd_create("journal-reporter", os.MFD_CLOEXEC | os.MFD_ALLOW_SEALING)
        try:
            view = memoryview(payload)
            while view:
                view = view[os.write(fd, view):]
            fcntl.fcntl(
                fd,
                fcntl.F_ADD_SEALS,
                fcntl.F_SEAL_SHRINK | fcntl.F_SEAL_GROW | fcntl.F_SEAL_WRITE | fcntl.F_SEAL_SEAL,
            )
            socket.send_fds(sock, [b""], [fd], 0, self.socket_path)
        finally:
            os.close(fd)


class ConsoleSink:
    """Print each record of the entry on stdout, one per line."""

    def __init__(self, console: Optional[Console] = None) -> None:
        self.console = console or Console(soft_wrap=True)

    def send(self, records: Sequence[bytes]) -> None:
        for record in records:
            self.console.print(
                record.decode("utf-8", errors="replace"), markup=False, highlight=False, emoji=False
            )
