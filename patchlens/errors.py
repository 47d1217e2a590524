"""Exception types raised outside the pure parser."""

from __future__ import annotations


class PatchlensError(Exception):
    """Base class for errors the CLI reports to the user."""


class GitError(PatchlensError):
    """Raised when raw diff text cannot be obtained from git.

    Args:
        code: Stable error code string (e.g. ``GIT_UNAVAILABLE``).
        message: Human-readable error message.
    """

    def __init__(self, code: str, message: str) -> None:
        super().__init__(message)
        self.code = code
        self.message = message


class LineRangeError(PatchlensError, ValueError):
    """Raised for a malformed ``start,end`` or ``start,+offset`` range."""
