"""Helpers for parsing unified diffs into file/hunk/line structures.

The parser is best-effort: blocks whose ``a/<path> b/<path>`` header cannot
be read are dropped rather than reported as errors, and hunk header counts
are kept as declared but never trusted for anything derived.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass

from patchlens.models import (
    AdditionLine,
    ContextLine,
    DeletionLine,
    DiffReport,
    FileDiff,
    FileStatus,
    Hunk,
    HunkLine,
)

FILE_DELIMITER = re.compile(r"^diff --git ", re.MULTILINE)
PATH_HEADER = re.compile(r"a/(.+?) b/(.+)")
HUNK_HEADER = re.compile(r"^@@ -(\d+)(?:,(\d+))? \+(\d+)(?:,(\d+))? @@ ?(.*)$")


@dataclass(frozen=True)
class FileHeader:
    """Paths and change status read from a file block's extended header."""
    old_path: str
    new_path: str
    status: FileStatus


@dataclass(frozen=True)
class HunkSpan:
    """A located hunk: its parsed ``@@`` header plus raw body lines."""
    old_start: int
    old_lines: int
    new_start: int
    new_lines: int
    section: str
    body: tuple[str, ...]


def split_file_blocks(raw: str) -> list[str]:
    """Split diff text into one block per file, delimiter removed.

    Text before the first ``diff --git`` line is not a file block and is
    discarded along with empty segments.
    """
    if not raw:
        return []
    segments = FILE_DELIMITER.split(raw)
    return [segment for segment in segments[1:] if segment]


def _block_lines(block: str) -> list[str]:
    lines = block.split("\n")
    # The newline ending the block is a terminator, not an empty context line.
    if lines and lines[-1] == "":
        lines.pop()
    return lines


def classify_header(lines: list[str]) -> FileHeader | None:
    """Read old/new paths and status from a block's header lines.

    Returns None when the first line is not an ``a/<path> b/<path>`` header.
    The ``new file mode``/``deleted file mode`` markers win over a path
    mismatch, and are only honoured before the first hunk.
    """
    if not lines:
        return None
    match = PATH_HEADER.match(lines[0])
    if not match:
        return None
    old_path, new_path = match.group(1), match.group(2)

    added = deleted = False
    for line in lines[1:]:
        if line.startswith("@@"):
            break
        if line.startswith("new file mode"):
            added = True
        elif line.startswith("deleted file mode"):
            deleted = True

    if added:
        status = FileStatus.ADDED
    elif deleted:
        status = FileStatus.DELETED
    elif old_path != new_path:
        status = FileStatus.RENAMED
    else:
        status = FileStatus.MODIFIED
    return FileHeader(old_path=old_path, new_path=new_path, status=status)


def _count(value: str | None) -> int:
    # A missing count means a single-line hunk.
    return int(value) if value else 1


def _span(header: re.Match[str], body: list[str]) -> HunkSpan:
    return HunkSpan(
        old_start=int(header.group(1)),
        old_lines=_count(header.group(2)),
        new_start=int(header.group(3)),
        new_lines=_count(header.group(4)),
        section=header.group(5).strip(),
        body=tuple(body),
    )


def scan_hunks(lines: list[str]) -> list[HunkSpan]:
    """Locate every ``@@`` header and slice the body up to the next one."""
    spans: list[HunkSpan] = []
    header: re.Match[str] | None = None
    body: list[str] = []
    for line in lines:
        match = HUNK_HEADER.match(line)
        if match:
            if header is not None:
                spans.append(_span(header, body))
            header, body = match, []
        elif header is not None:
            body.append(line)
    if header is not None:
        spans.append(_span(header, body))
    return spans

def classify_lines(body: Sequence[str], old_start: int, new_start: int) -> tuple[HunkLine, ...]:
    """Tag each body line and number it on the side(s) it belongs to.

    Counters start at the hunk's own declared starts. Lines with any other
    leading character (``\\ No newline at end of file``) are skipped and do
    not advance either counter.
    """
    old_line = old_start
    new_line = new_start
    parsed: list[HunkLine] = []
    for line in body:
        marker = line[:1]
        if marker == "+":
            parsed.append(AdditionLine(content=line[1:], new_line_number=new_line))
            new_line += 1
        elif marker == "-":
            parsed.append(DeletionLine(content=line[1:], old_line_number=old_line))
            old_line += 1
        elif marker in (" ", ""):
            parsed.append(
                ContextLine(
                    content=line[1:],
                    old_line_number=old_line,
                    new_line_number=new_line,
                )
            )
            old_line += 1
            new_line += 1
    return tuple(parsed)


def _build_hunk(span: HunkSpan) -> Hunk:
    return Hunk(
        old_start=span.old_start,
        old_lines=span.old_lines,
        new_start=span.new_start,
        new_lines=span.new_lines,
        section=span.section or None,
        lines=classify_lines(span.body, span.old_start, span.new_start),
    )


def parse_report(raw: str) -> DiffReport:
    """Parse a unified diff and report blocks that had to be skipped.

    Args:
        raw: Unified diff text, e.g. the stdout of ``git diff``.
    """
    files: list[FileDiff] = []
    warnings: list[str] = []
    for block in split_file_blocks(raw):
        lines = _block_lines(block)
        header = classify_header(lines)
        if header is None:
            first = lines[0] if lines else ""
            warnings.append(f"skipped block with unrecognized header: {first!r}")
            continue
        hunks = tuple(_build_hunk(span) for span in scan_hunks(lines[1:]))
        files.append(
            FileDiff(
                file=header.new_path,
                status=header.status,
                old_file=header.old_path if header.old_path != header.new_path else None,
                hunks=hunks,
            )
        )
    return DiffReport(files=tuple(files), warnings=tuple(warnings))


def parse_git_diff(raw: str) -> list[FileDiff]:
    """Parse a unified diff into per-file diffs in input order.

    An empty result means "no changes"; there is no parse-error condition.

    Args:
        raw: Unified diff text.
    """
    return list(parse_report(raw).files)
