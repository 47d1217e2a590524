"""Text and JSON views over parsed diffs.

Every renderer is read-only over the model and returns a string; printing
is left to the caller.
"""

from __future__ import annotations

import json
from collections.abc import Sequence

from patchlens.models import FileDiff, FileStatus, LineType
from patchlens.settings import settings
from patchlens.stats import bar_widths, summarize

NO_CHANGES = "No changes"

_RESET = "\x1b[0m"
_BOLD = "\x1b[1m"
_RED = "\x1b[31m"
_GREEN = "\x1b[32m"
_YELLOW = "\x1b[33m"
_CYAN = "\x1b[36m"
_GRAY = "\x1b[90m"

_LINE_STYLES = {
    LineType.ADDITION.value: ("+", _GREEN),
    LineType.DELETION.value: ("-", _RED),
    LineType.CONTEXT.value: (" ", _GRAY),
}

_STATUS_GLYPHS = {
    FileStatus.ADDED: ("+", _GREEN),
    FileStatus.DELETED: ("-", _RED),
}


def _paint(text: str, style: str, color: bool) -> str:
    if not color or not text:
        return text
    return f"{style}{text}{_RESET}"


def _file_title(entry: FileDiff) -> str:
    if entry.old_file:
        return f"{entry.old_file} → {entry.file} ({entry.status.value})"
    return f"{entry.file} ({entry.status.value})"


def render_full(files: Sequence[FileDiff], *, color: bool = False) -> str:
    """Render every file, hunk and line with +/-/space markers.

    The output is for people: it is not guaranteed to parse back.
    """
    if not files:
        return _paint(NO_CHANGES, _GRAY, color)

    out: list[str] = []
    for entry in files:
        out.append("")
        out.append(_paint(_file_title(entry), _BOLD, color))
        out.append(_paint("─" * 60, _GRAY, color))
        for hunk in entry.hunks:
            out.append(_paint(hunk.header, _CYAN, color))
            for line in hunk.lines:
                marker, style = _LINE_STYLES[line.type]
                out.append(_paint(f"{marker}{line.content}", style, color))
    return "\n".join(out)


def render_stat(
    files: Sequence[FileDiff],
    *,
    max_width: int | None = None,
    path_width: int | None = None,
    color: bool = False,
) -> str:
    """Render one diffstat row per file followed by a totals row.

    Args:
        files: Parsed files to summarize.
        max_width: Cap for the +/- bar; defaults to ``PATCHLENS_STAT_WIDTH``.
        path_width: Padding for the path column; defaults to
            ``PATCHLENS_PATH_WIDTH``.
        color: Wrap glyphs and bars in ANSI colors.
    """
    if not files:
        return _paint(NO_CHANGES, _GRAY, color)

    if max_width is None:
        max_width = settings.stat_width()
    if path_width is None:
        path_width = settings.path_width()

    rows: list[str] = []
    for entry in files:
        glyph, style = _STATUS_GLYPHS.get(entry.status, ("~", _YELLOW))
        added, deleted = bar_widths(entry.additions, entry.deletions, max_width)
        bar = _paint("+" * added, _GREEN, color) + _paint("-" * deleted, _RED, color)
        rows.append(
            f" {_paint(glyph, style, color)} {entry.file.ljust(path_width)} | "
            f"{entry.changes:>4} {bar}".rstrip()
        )

    total = summarize(files)
    rows.append(_paint("─" * 70, _GRAY, color))
    rows.append(
        f" {total.files} file(s) changed, "
        f"{_paint(f'{total.additions} insertions(+)', _GREEN, color)}, "
        f"{_paint(f'{total.deletions} deletions(-)', _RED, color)}"
    )
    return "\n".join(rows)


def diff_document(files: Sequence[FileDiff]) -> dict[str, list[dict]]:
    """Return the lossless ``{"files": [...]}`` payload for *files*."""
    return {
        "files": [
            entry.model_dump(mode="json", by_alias=True, exclude_none=True)
            for entry in files
        ]
    }


def render_json(files: Sequence[FileDiff], *, indent: int | None = 2) -> str:
    """Serialize the full model; ``{"files": []}`` when nothing changed."""
    return json.dumps(diff_document(files), indent=indent, ensure_ascii=False)
