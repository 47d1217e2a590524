"""Pydantic models for parsed unified diffs."""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, computed_field
from pydantic.alias_generators import to_camel


class FileStatus(str, Enum):
    """How a file changed between the two sides of a diff."""
    ADDED = "added"
    MODIFIED = "modified"
    DELETED = "deleted"
    RENAMED = "renamed"


class LineType(str, Enum):
    """Classification of a single hunk body line."""
    CONTEXT = "context"
    ADDITION = "addition"
    DELETION = "deletion"


class _Frozen(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class ContextLine(_Frozen):
    """Line present on both sides; numbered on both."""
    type: Literal["context"] = "context"
    content: str
    old_line_number: int
    new_line_number: int


class AdditionLine(_Frozen):
    """Line only present in the new version."""
    type: Literal["addition"] = "addition"
    content: str
    new_line_number: int
    old_line_number: None = Field(default=None, exclude=True)


class DeletionLine(_Frozen):
    """Line only present in the old version."""
    type: Literal["deletion"] = "deletion"
    content: str
    old_line_number: int
    new_line_number: None = Field(default=None, exclude=True)


HunkLine = Annotated[
    Union[ContextLine, AdditionLine, DeletionLine],
    Field(discriminator="type"),
]


class Hunk(_Frozen):
    """A contiguous span of changes with its declared header extents.

    The ``old_lines``/``new_lines`` counts are taken verbatim from the
    ``@@`` header and may disagree with the body; nothing derives from them.
    """
    old_start: int
    old_lines: int
    new_start: int
    new_lines: int
    section: str | None = None  # text after the closing @@, if any
    lines: tuple[HunkLine, ...] = ()

    @property
    def additions(self) -> int:
        return sum(1 for line in self.lines if line.type == LineType.ADDITION)

    @property
    def deletions(self) -> int:
        return sum(1 for line in self.lines if line.type == LineType.DELETION)

    @property
    def header(self) -> str:
        """Render the ``@@`` header line for this hunk."""
        text = f"@@ -{self.old_start},{self.old_lines} +{self.new_start},{self.new_lines} @@"
        if self.section:
            text = f"{text} {self.section}"
        return text


class FileDiff(_Frozen):
    """All hunks for one changed file.

    ``additions`` and ``deletions`` are computed from the classified lines so
    they can never drift from the hunk bodies.
    """
    file: str
    status: FileStatus
    old_file: str | None = None  # only set when the path changed
    hunks: tuple[Hunk, ...] = ()

    @computed_field  # type: ignore[prop-decorator]
    @property
    def additions(self) -> int:
        return sum(hunk.additions for hunk in self.hunks)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def deletions(self) -> int:
        return sum(hunk.deletions for hunk in self.hunks)

    @property
    def changes(self) -> int:
        return self.additions + self.deletions


class DiffReport(_Frozen):
    """Parsed files plus diagnostics for blocks that could not be read."""
    files: tuple[FileDiff, ...] = ()
    warnings: tuple[str, ...] = ()
