"""
problem.data — Problem-data store and problem directory loader.

A problem directory holds one crash report, one file per field
(``executable``, ``pid``, ``reason``, ``coredump``, …).  Text files
become text items; everything else is kept as a path to the file.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Union

from ..core.errors import ProblemDataError
from ..core.log import debug_print
from ..core.models import ItemFlags, ProblemItem

DEFAULT_MAX_TEXT_SIZE = 1024 * 1024


class ProblemData:
    """
    Ordered mapping of field name to ``ProblemItem``.

    Usage::

        pd = ProblemData()
        pd.add_text("reason", "killed by SIGSEGV")
        pd.get_content("reason")
    """

    def __init__(self) -> None:
        self._items: Dict[str, ProblemItem] = {}

    def __contains__(self, name: object) -> bool:
        return name in self._items

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[str]:
        return iter(self._items)

    def names(self) -> List[str]:
        return list(self._items)

    def get_item(self, name: str) -> Optional[ProblemItem]:
        return self._items.get(name)

    def get_content(self, name: str) -> Optional[str]:
        item = self._items.get(name)
        return item.content if item is not None else None

    def add(self, name: str, item: ProblemItem) -> None:
        """Insert or replace *name*; a replaced item keeps its position."""
        self._items[name] = item

    def add_text(self, name: str, content: str, *, editable: bool = True) -> None:
        flags = ItemFlags.TEXT | _line_flag(content)
        if editable:
            flags |= ItemFlags.EDITABLE
        self.add(name, ProblemItem(content=content, flags=flags))

    def add_text_noteditable(self, name: str, content: str) -> None:
        self.add_text(name, content, editable=False)

    def add_binary(self, name: str, path: Union[str, Path]) -> None:
        self.add(name, ProblemItem(content=str(path), flags=ItemFlags.BINARY))


def _line_flag(content: str) -> ItemFlags:
    # A single trailing newline still counts as one line
    return ItemFlags.MULTILINE if "\n" in content.rstrip("\n") else ItemFlags.ONELINE


def _read_text(path: Path, max_text_size: int) -> Optional[str]:
    """Return the file's text, or ``None`` when it must be treated as binary."""
    if path.stat().st_size > max_text_size:
        return None
    raw = path.read_bytes()
    if b"\0" in raw:
        return None
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError:
        return None


def load_problem_data(
    dump_dir: Union[str, Path],
    *,
    max_text_size: int = DEFAULT_MAX_TEXT_SIZE,
    verbose: bool = False,
) -> ProblemData:
    """
    Load every regular, non-hidden file of *dump_dir* as a problem item.

    Items are added sorted by file name so enumeration order is stable.
    Raises ``ProblemDataError`` when the directory cannot be read.
    """
    root = Path(dump_dir)
    if not root.is_dir():
        raise ProblemDataError(f"'{root}' is not a problem directory")

    pd = ProblemData()
    try:
        with os.scandir(root) as it:
            entries = sorted(it, key=lambda e: e.name)
    except OSError as exc:
        raise ProblemDataError(f"Can't read problem directory '{root}': {exc}") from exc

    for entry in entries:
        if entry.name.startswith(".") or not entry.is_file(follow_symlinks=False):
            continue
        if "=" in entry.name:
            debug_print("problem", f"{entry.name}: skipped, not a journal field name", enabled=verbose)
            continue
        path = Path(entry.path)
        try:
            text = _read_text(path, max_text_size)
        except OSError as exc:
            raise ProblemDataError(f"Can't read '{path}': {exc}") from exc
        if text is None:
            pd.add_binary(entry.name, path)
            debug_print("problem", f"{entry.name}: binary", enabled=verbose)
        else:
            pd.add_text(entry.name, text)
            debug_print("problem", f"{entry.name}: text ({len(text)} chars)", enabled=verbose)

    if not pd:
        raise ProblemDataError(f"Problem directory '{root}' is empty")
    return pd


def prepare_for_journal(pd: ProblemData) -> ProblemData:
    """
    Normalize problem data for journal reporting, in place.

    Only the binary name is kept in ``executable``, and ``crash_function``
    defaults to ``??`` because journal catalog messages refer to it.
    """
    exe = pd.get_content("executable")
    if exe and "/" in exe:
        binary_name = exe.rstrip("\n").rsplit("/", 1)[1]
        if binary_name:
            pd.add_text_noteditable("executable", binary_name)

    if pd.get_content("crash_function") is None:
        pd.add_text_noteditable("crash_function", "??")
    return pd
