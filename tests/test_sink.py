import fcntl
import os
import socket
import struct

import pytest
from rich.console import Console

from journal_reporter.core.errors import JournalSendError
from journal_reporter.journal.sink import ConsoleSink, NativeJournalSink, serialize_records


def test_serialize_single_line_records():
    assert serialize_records([b"MESSAGE=hello", b"PRIORITY=2"]) == b"MESSAGE=hello\nPRIORITY=2\n"


def test_serialize_multiline_value_uses_length_prefix():
    value = b"\nline one\nline two"
    out = serialize_records([b"PROBLEM_REPORT=" + value])
    assert out == b"PROBLEM_REPORT\n" + struct.pack("<Q", len(value)) + value + b"\n"


def test_serialize_empty_value():
    assert serialize_records([b"PROBLEM_REPORT="]) == b"PROBLEM_REPORT=\n"


def test_serialize_rejects_record_without_name():
    with pytest.raises(ValueError):
        serialize_records([b"no separator"])
    with pytest.raises(ValueError):
        serialize_records([b"=value"])


def test_native_sink_sends_one_datagram(tmp_path):
    path = str(tmp_path / "j.sock")
    server = socket.socket(socket.AF_UNIX, socket.SOCK_DGRAM)
    server.bind(path)
    try:
        records = [b"MESSAGE=crash", b"PROBLEM_REPORT=\nbody"]
        NativeJournalSink(path).send(records)
        assert server.recv(65536) == serialize_records(records)
    finally:
        server.close()


def test_native_sink_without_journal(tmp_path):
    with pytest.raises(JournalSendError):
        NativeJournalSink(str(tmp_path / "missing.sock")).send([b"MESSAGE=x"])


def test_console_sink_prints_records():
    console = Console(record=True, width=200)
    ConsoleSink(console).send([b"MESSAGE=[red]crash[/]", b"PRIORITY=2"])
    text = console.export_text()
    assert "MESSAGE=[red]crash[/]" in text
    assert "PRIORITY=2" in text


def test_native_sink_passes_large_entry_as_memfd(tmp_path):
    path = str(tmp_path / "j.sock")
    server = socket.socket(socket.AF_UNIX, socket.SOCK_DGRAM)
    server.bind(path)
    records = [b"MESSAGE=x", b"PROBLEM_BACKTRACE=" + b"a" * 400_000]
    try:
        NativeJournalSink(path).send(records)
        msg, fds, _flags, _addr = socket.recv_fds(server, 1024, 1)
    finally:
        server.close()
    assert msg == b""
    assert len(fds) == 1
    try:
        expected = serialize_records(records)
        assert os.pread(fds[0], len(expected) + 1, 0) == expected
        seals = fcntl.fcntl(fds[0], fcntl.F_GET_SEALS)
        assert seals & fcntl.F_SEAL_WRITE
    finally:
        os.close(fds[0])
