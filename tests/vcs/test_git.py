# Copyright 2026 Justin Cook
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Tests for the git command layer, against a throw-away repository."""

import os
import re
import subprocess
from unittest.mock import patch

import pytest

from headache.core.errors import VcsError
from headache.vcs.client import VersioningClient
from headache.vcs.git import Git


@pytest.fixture
def repository(git, git_repository):
    (git_repository / "src").mkdir()
    (git_repository / "src" / "a.txt").write_text("hello\n")
    git("add", ".")
    git("commit", "-q", "-m", "initial")
    return git_repository


def test_root(repository):
    assert os.path.realpath(Git().root()) == os.path.realpath(str(repository))


def test_latest_revision(repository, git):
    revision = Git().latest_revision("src/a.txt")

    assert re.fullmatch(r"[0-9a-f]{40}", revision)
    assert revision == git("rev-parse", "HEAD").strip()


def test_latest_revision_of_untracked_file(repository):
    (repository / "untracked.txt").write_text("new\n")

    assert Git().latest_revision("untracked.txt") == ""


def test_show_content_at_revision(repository, git):
    revision = Git().latest_revision("src/a.txt")
    (repository / "src" / "a.txt").write_text("changed\n")
    git("commit", "-q", "-am", "change")

    assert Git().show_content_at_revision("src/a.txt", revision) == "hello\n"
    assert Git().show_content_at_revision(str(repository / "src" / "a.txt"), revision) == "hello\n"


def test_show_content_relative_to_working_directory(repository, monkeypatch):
    revision = Git().latest_revision("src/a.txt")
    monkeypatch.chdir(repository / "src")

    assert Git().show_content_at_revision("a.txt", revision) == "hello\n"


def test_show_content_without_revision(repository):
    assert Git().show_content_at_revision("src/a.txt", "") == ""


def test_failing_command(repository):
    with pytest.raises(VcsError) as excinfo:
        Git().show_content_at_revision("src/a.txt", "not-a-revision")

    assert "git rev-parse not-a-revision" in str(excinfo.value)


def test_missing_git_executable():
    with patch("headache.vcs.git.subprocess.run", side_effect=FileNotFoundError("git")):
        with pytest.raises(VcsError, match="git executable not found"):
            Git().root()


def test_called_process_error_carries_stderr():
    error = subprocess.CalledProcessError(128, ["git", "status"], stderr="fatal: not a git repository\n")
    with patch("headache.vcs.git.subprocess.run", side_effect=error):
        with pytest.raises(VcsError, match="fatal: not a git repository"):
            Git().status("--porcelain")


def test_changes_since_revision(repository, git):
    revision = Git().latest_revision("src/a.txt")
    (repository / "src" / "b.txt").write_text("committed\n")
    git("add", "src/b.txt")
    git("commit", "-q", "-m", "add b")
    git("mv", "src/a.txt", "src/renamed.txt")
    (repository / "c.txt").write_text("untracked\n")

    changes = VersioningClient(Git()).get_changes(revision)

    assert [change.path for change in changes] == ["src/b.txt", "src/renamed.txt", "c.txt"]


def test_changes_include_files_of_untracked_directories(repository):
    revision = Git().latest_revision("src/a.txt")
    (repository / "pkg" / "nested").mkdir(parents=True)
    (repository / "pkg" / "new.txt").write_text("untracked\n")
    (repository / "pkg" / "nested" / "deep.txt").write_text("untracked\n")

    changes = VersioningClient(Git()).get_changes(revision)

    assert sorted(change.path for change in changes) == ["pkg/nested/deep.txt", "pkg/new.txt"]
