"""Unit tests for git diff acquisition."""

import shutil
import subprocess

import pytest

from patchlens import git as git_mod
from patchlens.diff import parse_git_diff
from patchlens.errors import GitError
from patchlens.git import build_diff_args, is_work_tree, normalize_directory_path, read_git_diff
from patchlens.models import FileStatus


class TestNormalizeDirectoryPath:
    """Test directory path normalization."""

    def test_normalizes_relative_path(self, tmp_path, monkeypatch) -> None:
        """Relative paths are converted to absolute."""
        monkeypatch.chdir(tmp_path)
        result = normalize_directory_path("subdir")
        assert str(tmp_path.resolve() / "subdir") == result

    def test_expands_home_directory(self) -> None:
        """Tilde is expanded to home directory."""
        result = normalize_directory_path("~/somedir")
        assert "~" not in result


class TestBuildDiffArgs:
    """Test git argument construction."""

    def test_working_tree(self) -> None:
        assert build_diff_args(context_lines=3) == [
            "diff",
            "--no-color",
            "--no-ext-diff",
            "--unified=3",
        ]

    def test_staged_with_path(self) -> None:
        args = build_diff_args(staged=True, path="src/app.py", context_lines=1)
        assert args[-4:] == ["--unified=1", "--cached", "--", "src/app.py"]

    def test_commit_wins_over_staged(self) -> None:
        args = build_diff_args(staged=True, commit="abc123", context_lines=3)
        assert args[-2:] == ["abc123^", "abc123"]
        assert "--cached" not in args

    def test_context_lines_from_settings(self, clean_env) -> None:
        clean_env.setenv("PATCHLENS_CONTEXT_LINES", "0")
        assert "--unified=0" in build_diff_args()


class TestReadGitDiff:
    """Test running git against a scratch repository."""

    def test_no_changes(self, git_repo) -> None:
        assert read_git_diff(str(git_repo.path)) == ""

    def test_working_tree_changes(self, git_repo) -> None:
        (git_repo.path / "notes.txt").write_text("one\n2\nthree\n")
        files = parse_git_diff(read_git_diff(str(git_repo.path)))
        assert len(files) == 1
        assert files[0].file == "notes.txt"
        assert (files[0].additions, files[0].deletions) == (1, 1)

    def test_staged_only(self, git_repo) -> None:
        (git_repo.path / "staged.txt").write_text("hello\n")
        git_repo.git("add", "staged.txt")
        (git_repo.path / "notes.txt").write_text("unstaged\n")

        files = parse_git_diff(read_git_diff(str(git_repo.path), staged=True))
        assert [(f.file, f.status) for f in files] == [("staged.txt", FileStatus.ADDED)]

    def test_path_limit(self, git_repo) -> None:
        (git_repo.path / "notes.txt").write_text("changed\n")
        (git_repo.path / "other.txt").write_text("x\n")
        git_repo.git("add", "other.txt")
        raw = read_git_diff(str(git_repo.path), staged=True, path="notes.txt")
        assert raw == ""

    def test_commit(self, git_repo) -> None:
        git_repo.git("mv", "notes.txt", "renamed.txt")
        git_repo.git("commit", "-q", "-m", "rename")
        sha = git_repo.git("rev-parse", "HEAD").strip()

        files = parse_git_diff(read_git_diff(str(git_repo.path), commit=sha))
        assert len(files) == 1
        assert files[0].status is FileStatus.RENAMED
        assert files[0].old_file == "notes.txt"
        assert files[0].file == "renamed.txt"

    def test_root_commit(self, git_repo) -> None:
        sha = git_repo.git("rev-list", "--max-parents=0", "HEAD").strip()
        files = parse_git_diff(read_git_diff(str(git_repo.path), commit=sha))
        assert [(f.file, f.status, f.additions) for f in files] == [
            ("notes.txt", FileStatus.ADDED, 3)
        ]

    def test_unknown_commit(self, git_repo) -> None:
        with pytest.raises(GitError) as exc_info:
            read_git_diff(str(git_repo.path), commit="deadbeef")
        assert exc_info.value.code == "GIT_ERROR"

    @pytest.mark.skipif(shutil.which("git") is None, reason="git executable not available")
    def test_not_a_repository(self, tmp_path, monkeypatch) -> None:
        monkeypatch.setenv("GIT_CEILING_DIRECTORIES", str(tmp_path))
        plain = tmp_path / "plain"
        plain.mkdir()
        with pytest.raises(GitError) as exc_info:
            read_git_diff(str(plain))
        assert exc_info.value.code == "NOT_A_REPOSITORY"

    def test_missing_directory(self, tmp_path) -> None:
        with pytest.raises(GitError, match="Directory not found"):
            read_git_diff(str(tmp_path / "missing"))

    def test_missing_git_binary(self, tmp_path, monkeypatch) -> None:
        monkeypatch.setattr(git_mod.shutil, "which", lambda name: None)
        with pytest.raises(GitError) as exc_info:
            read_git_diff(str(tmp_path))
        assert exc_info.value.code == "GIT_UNAVAILABLE"

    def test_timeout(self, git_repo, monkeypatch) -> None:
        def fake_run_git(git, repo, args):
            if args[0] == "rev-parse":
                return "true\n"
            raise subprocess.TimeoutExpired(cmd=[git, *args], timeout=0.5)

        monkeypatch.setattr(git_mod, "_run_git", fake_run_git)
        with pytest.raises(GitError) as exc_info:
            read_git_diff(str(git_repo.path))
        assert exc_info.value.code == "GIT_TIMEOUT"


class TestIsWorkTree:
    """Test work tree detection."""

    def test_true_for_repo_subdirectory(self, git_repo) -> None:
        sub = git_repo.path / "pkg"
        sub.mkdir()
        assert is_work_tree(str(sub)) is True

    def test_false_for_missing_path(self, tmp_path) -> None:
        assert is_work_tree(str(tmp_path / "nope")) is False
