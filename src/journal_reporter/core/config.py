"""
core.config — Centralised configuration management.

Loads settings from environment variables and .env files.
Every other module accesses configuration through ``Config``.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

from .models import DumpMode

DEFAULT_SOCKET_PATH = "/run/systemd/journal/socket"

_env_loaded = False


def _load_dotenv() -> None:
    """Load .env from the working directory and the home directory.

    Existing environment variables win over file values.
    """
    global _env_loaded
    if _env_loaded:
        return

    for p in (Path.cwd() / ".env", Path.home() / ".env"):
        if p.exists():
            load_dotenv(p, override=False)
    _env_loaded = True


def _env_flag(name: str) -> bool:
    return os.environ.get(name, "").lower() in ("1", "true", "yes")


class Config(BaseModel):
    """
    Runtime configuration for one reporter invocation.

    Create via ``load_config()`` which pre-loads the env file.
    """

    # ── Problem directory ────────────────────────────────────────────
    problem_dir: Path = Field(default_factory=lambda: Path("."))
    max_text_size: int = Field(
        default=1024 * 1024,
        description="Files larger than this are loaded as binary items",
    )

    # ── Report ───────────────────────────────────────────────────────
    message_id: Optional[str] = Field(
        default=None,
        description="Catalog message id; the built-in default is used when unset",
    )
    format_file: Optional[Path] = None
    dump: DumpMode = DumpMode.NONE

    # ── Journal ──────────────────────────────────────────────────────
    socket_path: str = DEFAULT_SOCKET_PATH

    # ── Debug ────────────────────────────────────────────────────────
    debug: bool = False
    verbose: int = 0


def load_config(**overrides: object) -> Config:
    """
    Load ``Config`` from environment, applying optional overrides.

    Overrides whose value is ``None`` are ignored so that unset CLI
    options fall through to the environment.
    """
    _load_dotenv()
    defaults: dict = {
        "debug": _env_flag("JOURNAL_REPORTER_DEBUG"),
    }
    verbose = os.environ.get("JOURNAL_REPORTER_VERBOSE")
    if verbose:
        defaults["verbose"] = 1 if verbose.lower() in ("true", "yes") else int(verbose)
    message_id = os.environ.get("JOURNAL_REPORTER_MESSAGE_ID")
    if message_id is not None:
        defaults["message_id"] = message_id
    dump = os.environ.get("JOURNAL_REPORTER_DUMP")
    if dump:
        defaults["dump"] = DumpMode.parse(dump)
    format_file = os.environ.get("JOURNAL_REPORTER_FORMAT_FILE")
    if format_file:
        defaults["format_file"] = Path(format_file)
    socket_path = os.environ.get("JOURNAL_REPORTER_SOCKET")
    if socket_path:
        defaults["socket_path"] = socket_path
    max_text_size = os.environ.get("JOURNAL_REPORTER_MAX_TEXT_SIZE")
    if max_text_size:
        defaults["max_text_size"] = int(max_text_size)
    defaults.update({k: v for k, v in overrides.items() if v is not None})
    return Config(**defaults)  # type: ignore[arg-type]
