from __future__ import annotations

import os
from pathlib import Path

import pytest

from journal_reporter.problem.data import ProblemData


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in list(os.environ):
        if name.startswith("JOURNAL_REPORTER_"):
            monkeypatch.delenv(name)


@pytest.fixture
def problem_data() -> ProblemData:
    pd = ProblemData()
    pd.add_text("executable", "/usr/bin/true")
    pd.add_text("pid", "4242")
    pd.add_text("reason", "true killed by SIGSEGV")
    pd.add_text("cmdline", "true --help")
    pd.add_text("uid", "1000")
    pd.add_text("backtrace", "#0 main\n#1 __libc_start_main\n")
    pd.add_binary("coredump", "/tmp/problem/coredump")
    return pd


@pytest.fixture
def problem_dir(tmp_path: Path) -> Path:
    d = tmp_path / "ccpp-2026-10-19-4242"
    d.mkdir()
    (d / "executable").write_text("/usr/bin/true")
    (d / "pid").write_text("4242")
    (d / "reason").write_text("true killed by SIGSEGV")
    (d / "pkg_name").write_text("coreutils")
    (d / "backtrace").write_text("#0 main\n#1 __libc_start_main\n")
    (d / "coredump").write_bytes(b"\x7fELF\x00\x01\x02")
    return d
