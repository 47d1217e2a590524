"""Read patchlens settings from ``config.env`` and ``./.env`` files.

Values found in files are copied into ``os.environ`` so that
:class:`patchlens.settings.Settings` sees them like any other variable. The
shell always wins over the project ``.env``, which wins over the user's
``$XDG_CONFIG_HOME/patchlens/config.env``.

Only keys patchlens itself reads are imported: anything with the
``PATCHLENS_`` prefix, plus ``NO_COLOR``.
"""

from __future__ import annotations

import os
from pathlib import Path

ENV_PREFIX = "PATCHLENS_"
EXTRA_KEYS = frozenset({"NO_COLOR"})
QUOTES = ('"', "'")


def config_dir() -> Path:
    """Directory holding the user-level ``config.env``."""
    base = os.environ.get("XDG_CONFIG_HOME", "").strip()
    if not base:
        base = os.path.join(Path.home(), ".config")
    return Path(base) / "patchlens"


def config_files() -> list[Path]:
    """Candidate files, lowest precedence first."""
    return [config_dir() / "config.env", Path.cwd() / ".env"]


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in QUOTES:
        return value[1:-1]
    # `#` starts a comment only at the beginning or after whitespace.
    for i, ch in enumerate(value):
        if ch == "#" and (i == 0 or value[i - 1].isspace()):
            return value[:i].rstrip()
    return value


def parse_env_file(path: str | Path) -> dict[str, str]:
    """Return the ``KEY=value`` assignments in *path*.

    Shell-style ``export`` prefixes, quoted values and ``#`` comments are
    understood. Lines without a key are ignored, as is a file that is
    missing or not UTF-8.
    """
    try:
        text = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return {}

    pairs: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if line.startswith("export "):
            line = line.removeprefix("export ").lstrip()
        if not line or line.startswith("#"):
            continue
        key, sep, value = line.partition("=")
        key = key.strip()
        if sep and key:
            pairs[key] = _unquote(value.strip())
    return pairs


def _wanted(key: str) -> bool:
    return key.startswith(ENV_PREFIX) or key in EXTRA_KEYS


def load_config() -> None:
    """Copy file settings into ``os.environ`` without replacing set variables."""
    merged: dict[str, str] = {}
    for path in config_files():
        merged.update(parse_env_file(path))

    for key, value in merged.items():
        if _wanted(key):
            os.environ.setdefault(key, value)
