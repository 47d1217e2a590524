"""Line-range filtering over parsed diffs, by new-side line number."""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass

from patchlens.errors import LineRangeError
from patchlens.models import FileDiff, Hunk

_RANGE = re.compile(r"^\s*(\d+)\s*(?:,\s*(\+)?\s*(\d+)\s*)?$")


@dataclass(frozen=True)
class LineRange:
    """Inclusive range of new-side line numbers."""
    start: int
    end: int

    @classmethod
    def parse(cls, text: str) -> LineRange:
        """Parse ``start,end``, ``start,+offset`` or a single ``line``.

        Raises:
            LineRangeError: If *text* is not one of those forms or ends
                before it starts.
        """
        match = _RANGE.match(text or "")
        if not match:
            raise LineRangeError(
                f"Invalid line range {text!r} (expected e.g. 10,20 or 10,+5)"
            )
        start = int(match.group(1))
        if match.group(3) is None:
            end = start
        elif match.group(2):
            end = start + int(match.group(3))
        else:
            end = int(match.group(3))
        if end < start:
            raise LineRangeError(f"Invalid line range {text!r}: end is before start")
        return cls(start=start, end=end)

    def __contains__(self, line_number: object) -> bool:
        return isinstance(line_number, int) and self.start <= line_number <= self.end


def _filter_hunk(hunk: Hunk, line_range: LineRange) -> Hunk | None:
    kept = tuple(line for line in hunk.lines if line.new_line_number in line_range)
    if not kept:
        return None
    return hunk.model_copy(update={"lines": kept})


def filter_files(files: Iterable[FileDiff], line_range: LineRange) -> list[FileDiff]:
    """Keep only lines whose new line number falls inside *line_range*.

    Deletions have no new line number and are always dropped. Hunks left
    without lines are removed, and so are files left without hunks. Counts
    on the returned files reflect the remaining lines.
    """
    result: list[FileDiff] = []
    for entry in files:
        hunks = tuple(
            filtered
            for filtered in (_filter_hunk(hunk, line_range) for hunk in entry.hunks)
            if filtered is not None
        )
        if hunks:
            result.append(entry.model_copy(update={"hunks": hunks}))
    return result
