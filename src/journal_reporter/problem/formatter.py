"""
problem.formatter — Render a summary and description from a template.

Template syntax (one directive per line)::

    %summary:: [%pkg_name%] %reason%
    Crash details:: executable,pid,%oneline,-uid
    Free text with %element% placeholders.

* ``%summary::`` gives the summary line.
* ``Title:: items`` adds a description section listing the named
  elements.  ``%oneline``, ``%multiline``, ``%text`` and ``%binary``
  expand to every element of that class not named anywhere else in the
  template; ``-name`` keeps an element out of those expansions;
  ``%reporter`` adds a line naming this reporter.
* Any other line is free text.  ``#`` starts a comment line.

``%name%`` placeholders are replaced by element content.  Inside a
``[[ ... ]]`` group a missing element drops the whole group; outside a
group it renders empty.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Set, Tuple, Union

from ..core.errors import TemplateError
from ..core.models import ProblemItem, ProblemReport
from .data import ProblemData

DEFAULT_TEMPLATE = "%summary:: %reason%\n"
REPORTER_NAME = "journal-reporter"

CLASS_MACROS = ("%oneline", "%multiline", "%text", "%binary")

_PLACEHOLDER_RE = re.compile(r"%([A-Za-z0-9_.\-]+)%")
_GROUP_RE = re.compile(r"\[\[(.*?)\]\]")
_SECTION_RE = re.compile(r"^([^:]*?)::\s*(.*)$")
_NAME_RE = re.compile(r"^-?[A-Za-z0-9_.\-]+$")


@dataclass
class _Section:
    title: str
    items: List[str] = field(default_factory=list)


# A description line is either free text (str) or a section
_Line = Union[str, _Section]


def _placeholder_value(pd: ProblemData, name: str) -> Optional[str]:
    item = pd.get_item(name)
    if item is None or not item.is_text:
        return None
    return item.content.rstrip("\n")


def expand(text: str, pd: ProblemData) -> str:
    """Substitute ``%name%`` placeholders and ``[[ ... ]]`` groups in *text*."""

    def _group(m: re.Match) -> str:
        body = m.group(1)
        names = _PLACEHOLDER_RE.findall(body)
        if any(_placeholder_value(pd, n) is None for n in names):
            return ""
        return _PLACEHOLDER_RE.sub(lambda p: _placeholder_value(pd, p.group(1)) or "", body)

    text = _GROUP_RE.sub(_group, text)
    return _PLACEHOLDER_RE.sub(lambda p: _placeholder_value(pd, p.group(1)) or "", text)


def _format_item(name: str, item: ProblemItem) -> str:
    if item.is_binary:
        return f"{name}: binary file {item.content}"
    content = item.content.rstrip("\n")
    if item.is_multiline:
        return f"{name}:\n{content}"
    return f"{name}: {content}"


class ProblemFormatter:
    """
    Parsed report template.

    Usage::

        pf = ProblemFormatter.from_file("journal_format.conf")
        report = pf.generate_report(problem_data)
    """

    def __init__(self, summary: str, lines: List[_Line]) -> None:
        self.summary = summary
        self.lines = lines

    # ── Loading ──────────────────────────────────────────────────────

    @classmethod
    def from_string(cls, text: str) -> ProblemFormatter:
        summary: Optional[str] = None
        lines: List[_Line] = []
        for lineno, raw in enumerate(text.splitlines(), start=1):
            if raw.startswith("#"):
                continue
            m = _SECTION_RE.match(raw)
            if m is None:
                lines.append(raw)
                continue
            title, body = m.group(1).strip(), m.group(2).strip()
            if title == "%summary":
                if summary is not None:
                    raise TemplateError(f"line {lineno}: duplicate %summary section")
                summary = body
                continue
            if not title or title.startswith("%"):
                raise TemplateError(f"line {lineno}: unknown section '{title}'")
            items = [i.strip() for i in body.split(",") if i.strip()]
            for item in items:
                if item not in CLASS_MACROS and item != "%reporter" and not _NAME_RE.match(item):
                    raise TemplateError(f"line {lineno}: invalid item '{item}' in section '{title}'")
            lines.append(_Section(title=title, items=items))

        if summary is None:
            raise TemplateError("template has no %summary section")
        return cls(summary, lines)

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> ProblemFormatter:
        try:
            text = Path(path).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise TemplateError(f"Invalid format file: {path}: {exc}") from exc
        return cls.from_string(text)

    @classmethod
    def default(cls) -> ProblemFormatter:
        return cls.from_string(DEFAULT_TEMPLATE)

    # ── Rendering ────────────────────────────────────────────────────

    def _mentioned(self) -> Tuple[Set[str], Set[str]]:
        """Return (explicitly listed names, excluded names)."""
        listed: Set[str] = set(_PLACEHOLDER_RE.findall(self.summary))
        excluded: Set[str] = set()
        for line in self.lines:
            if isinstance(line, str):
                listed.update(_PLACEHOLDER_RE.findall(line))
                continue
            for item in line.items:
                if item.startswith("-"):
                    excluded.add(item[1:])
                elif not item.startswith("%"):
                    listed.add(item)
        return listed, excluded

    def _expand_macro(self, macro: str, pd: ProblemData, skip: Set[str]) -> List[str]:
        names = []
        for name in pd.names():
            if name in skip:
                continue
            item = pd.get_item(name)
            if item is None:
                continue
            if (
                (macro == "%oneline" and item.is_text and not item.is_multiline)
                or (macro == "%multiline" and item.is_text and item.is_multiline)
                or (macro == "%text" and item.is_text)
                or (macro == "%binary" and item.is_binary)
            ):
                names.append(name)
        return names

    def _render_section(self, section: _Section, pd: ProblemData, skip: Set[str]) -> List[str]:
        out: List[str] = []
        for entry in section.items:
            if entry.startswith("-"):
                continue
            if entry == "%reporter":
                out.append(f"reporter: {REPORTER_NAME}")
                continue
            names = self._expand_macro(entry, pd, skip) if entry in CLASS_MACROS else [entry]
            for name in names:
                item = pd.get_item(name)
                if item is not None:
                    out.append(_format_item(name, item))
        return out

    def generate_report(self, pd: ProblemData) -> ProblemReport:
        """Render the template against *pd*."""
        listed, excluded = self._mentioned()
        skip = listed | excluded

        description: List[str] = []
        for line in self.lines:
            if isinstance(line, str):
                description.append(expand(line, pd))
                continue
            body = self._render_section(line, pd, skip)
            if body:
                description.append(f"{line.title}:")
                description.extend(body)

        text = "\n".join(description).strip("\n")
        return ProblemReport(
            summary=expand(self.summary, pd).strip(),
            description=text or None,
        )
