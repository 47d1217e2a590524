"""Parse unified diffs into files, hunks and numbered lines."""

from __future__ import annotations

from patchlens.diff import parse_git_diff, parse_report
from patchlens.models import (
    AdditionLine,
    ContextLine,
    DeletionLine,
    DiffReport,
    FileDiff,
    FileStatus,
    Hunk,
    HunkLine,
    LineType,
)

__all__ = [
    "AdditionLine",
    "ContextLine",
    "DeletionLine",
    "DiffReport",
    "FileDiff",
    "FileStatus",
    "Hunk",
    "HunkLine",
    "LineType",
    "parse_git_diff",
    "parse_report",
]
