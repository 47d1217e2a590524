"""Shared pytest fixtures for patchlens tests."""

import os
import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

import pytest

# Keep host configuration from leaking into test results.
for k in list(os.environ):
    if k.startswith("PATCHLENS_") or k == "NO_COLOR":
        os.environ.pop(k, None)


MODIFIED_DIFF = """\
diff --git a/src/app.py b/src/app.py
index 83db48f..bf269f4 100644
--- a/src/app.py
+++ b/src/app.py
@@ -1,2 +1,3 @@
 a
+b
 c
"""

MULTI_FILE_DIFF = """\
diff --git a/README.md b/README.md
index 1111111..2222222 100644
--- a/README.md
+++ b/README.md
@@ -3,4 +3,4 @@ Intro
 keep one
-old line
+new line
 keep two
 keep three
@@ -20,3 +20,5 @@ def main():
 tail one
+added one
+added two
 tail two
diff --git a/docs/new.txt b/docs/new.txt
new file mode 100644
index 0000000..3333333
--- /dev/null
+++ b/docs/new.txt
@@ -0,0 +1,3 @@
+first
+second
+third
diff --git a/legacy.cfg b/legacy.cfg
deleted file mode 100644
index 4444444..0000000
--- a/legacy.cfg
+++ /dev/null
@@ -1,2 +0,0 @@
-key=1
-other=2
diff --git a/old/name.py b/new/name.py
similarity index 100%
rename from old/name.py
rename to new/name.py
"""


@dataclass
class GitRepo:
    """A scratch repository and a helper that runs git inside it."""
    path: Path
    git: Callable[..., str]


@pytest.fixture
def modified_diff() -> str:
    """Single file, single hunk: one line added between two context lines."""
    return MODIFIED_DIFF


@pytest.fixture
def multi_file_diff() -> str:
    """Modified, added, deleted and rename-only files in one diff."""
    return MULTI_FILE_DIFF


@pytest.fixture
def clean_env(monkeypatch):
    """Remove all PATCHLENS_ env vars for clean tests."""
    for key in list(os.environ.keys()):
        if key.startswith("PATCHLENS_") or key == "NO_COLOR":
            monkeypatch.delenv(key, raising=False)
    return monkeypatch


@pytest.fixture
def git_repo(tmp_path, monkeypatch):
    """Create a throwaway repository with one committed file."""
    if not shutil.which("git"):
        pytest.skip("git executable not available")

    monkeypatch.setenv("GIT_CONFIG_GLOBAL", os.devnull)
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    repo = tmp_path / "repo"
    repo.mkdir()

    def git(*args: str) -> str:
        result = subprocess.run(
            ["git", "-C", str(repo), *args],
            capture_output=True,
            text=True,
            check=True,
        )
        return result.stdout

    git("init", "-q")
    git("config", "user.email", "dev@example.com")
    git("config", "user.name", "Dev")
    git("config", "commit.gpgsign", "false")
    (repo / "notes.txt").write_text("one\ntwo\nthree\n")
    git("add", "notes.txt")
    git("commit", "-q", "-m", "initial")
    return GitRepo(path=repo, git=git)
