"""Diffstat aggregation over parsed files."""

from __future__ import annotations

from collections.abc import Iterable

from pydantic import BaseModel, ConfigDict

from patchlens.models import FileDiff


class DiffStat(BaseModel):
    """Aggregate counts across every file in a diff."""

    model_config = ConfigDict(frozen=True)

    files: int = 0
    additions: int = 0
    deletions: int = 0

    @property
    def changes(self) -> int:
        return self.additions + self.deletions


def summarize(files: Iterable[FileDiff]) -> DiffStat:
    """Total the classified additions and deletions of *files*."""
    count = additions = deletions = 0
    for entry in files:
        count += 1
        additions += entry.additions
        deletions += entry.deletions
    return DiffStat(files=count, additions=additions, deletions=deletions)


def _scaled(count: int, scale: int, denominator: int) -> int:
    # count * scale / denominator, rounded half up without float error.
    return (2 * count * scale + denominator) // (2 * denominator)


def bar_widths(additions: int, deletions: int, max_width: int) -> tuple[int, int]:
    """Split a bar of at most *max_width* cells between additions and deletions.

    Small files get one cell per changed line; larger ones are scaled down to
    *max_width*. A file with no changed lines divides by 1 and gets no bar.
    """
    total = additions + deletions
    scale = min(total, max_width)
    denominator = max(total, 1)
    added = _scaled(additions, scale, denominator)
    deleted = _scaled(deletions, scale, denominator)
    # Two halves rounded up can overshoot the cap by one cell.
    if added + deleted > scale:
        if added >= deleted:
            added -= 1
        else:
            deleted -= 1
    return added, deleted
