"""Run ``git diff`` and return the raw unified patch text."""

from __future__ import annotations

import shutil
from pathlib import Path
from subprocess import CalledProcessError, TimeoutExpired, run

import structlog

from patchlens.errors import GitError
from patchlens.settings import settings

logger = structlog.get_logger(__name__)


def normalize_directory_path(path: str) -> str:
    """Return a normalized absolute path for the provided directory string."""
    candidate = Path(path).expanduser()
    try:
        resolved = candidate.resolve(strict=False)
    except FileNotFoundError:
        resolved = candidate
    return str(resolved)


def _require_git_binary() -> str:
    git = shutil.which("git")
    if not git:
        raise GitError("GIT_UNAVAILABLE", "git executable not found on PATH")
    return git


def _run_git(git: str, repo: str, args: list[str]) -> str:
    result = run(
        [git, "-C", repo, *args],
        capture_output=True,
        text=True,
        encoding="utf-8",
        errors="replace",
        check=True,
        timeout=settings.git_timeout(),
    )
    return result.stdout


def _stderr(exc: CalledProcessError) -> str:
    return (exc.stderr or str(exc)).strip()


def is_work_tree(path: str) -> bool:
    """Return True if *path* is inside a Git working tree."""
    git = shutil.which("git")
    if not git or not Path(path).is_dir():
        return False
    try:
        output = _run_git(git, path, ["rev-parse", "--is-inside-work-tree"])
    except (CalledProcessError, TimeoutExpired, OSError):
        return False
    return output.strip() == "true"


def build_diff_args(
    *,
    staged: bool = False,
    commit: str | None = None,
    path: str | None = None,
    context_lines: int | None = None,
) -> list[str]:
    """Return the ``git diff`` arguments for the requested change set.

    A commit wins over ``staged``: it is shown against its first parent.
    """
    if context_lines is None:
        context_lines = settings.context_lines()
    args = ["diff", "--no-color", "--no-ext-diff", f"--unified={context_lines}"]
    if commit:
        args += [f"{commit}^", commit]
    elif staged:
        args.append("--cached")
    if path:
        args += ["--", path]
    return args


def _root_commit_args(commit: str, path: str | None, context_lines: int | None) -> list[str]:
    if context_lines is None:
        context_lines = settings.context_lines()
    args = ["diff-tree", "-p", "--root", "--no-color", f"--unified={context_lines}", commit]
    if path:
        args += ["--", path]
    return args


def read_git_diff(
    directory: str = ".",
    *,
    staged: bool = False,
    commit: str | None = None,
    path: str | None = None,
    context_lines: int | None = None,
) -> str:
    """Run ``git diff`` inside *directory* and return the unified patch.

    An empty string means there are no changes. A root commit has no
    parent, so it is diffed against the empty tree instead.

    Raises:
        GitError: If git is missing, *directory* is not a work tree, or the
            command fails or times out.
    """
    repo = normalize_directory_path(directory)
    if not Path(repo).is_dir():
        raise GitError("GIT_ERROR", f"Directory not found: {repo}")
    git = _require_git_binary()
    if not is_work_tree(repo):
        raise GitError("NOT_A_REPOSITORY", "Not a git repository")

    args = build_diff_args(
        staged=staged, commit=commit, path=path, context_lines=context_lines
    )
    logger.debug("Running git diff", directory=repo, args=args)
    try:
        return _run_git(git, repo, args)
    except TimeoutExpired as exc:
        raise GitError("GIT_TIMEOUT", f"git diff timed out after {exc.timeout}s") from exc
    except CalledProcessError as exc:
        stderr = _stderr(exc).lower()
        fallback_needed = commit and (
            "unknown revision or path" in stderr or "ambiguous argument" in stderr
        )
        if not fallback_needed:
            raise GitError("GIT_ERROR", f"git diff failed: {_stderr(exc)}") from exc

    logger.debug("Commit has no parent, diffing against empty tree", commit=commit)
    try:
        return _run_git(git, repo, _root_commit_args(commit, path, context_lines))
    except TimeoutExpired as exc:
        raise GitError("GIT_TIMEOUT", f"git diff timed out after {exc.timeout}s") from exc
    except CalledProcessError as exc:
        raise GitError("GIT_ERROR", f"git diff failed: {_stderr(exc)}") from exc
