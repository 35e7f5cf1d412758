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

"""
Pytest configuration and fixtures for headache tests.
"""
import shutil
import subprocess
from datetime import datetime

import pytest


class FixedClock:
    def __init__(self, now: datetime):
        self._now = now

    def now(self) -> datetime:
        return self._now


@pytest.fixture
def fixed_clock():
    """Fixture providing a clock frozen in mid 2022."""
    return FixedClock(datetime(2022, 6, 1, 12, 0, 0))


def run_git(repository, *args) -> str:
    result = subprocess.run(
        [
            "git",
            "-c", "user.name=Headache Tests",
            "-c", "user.email=tests@example.com",
            "-c", "commit.gpgsign=false",
            *args,
        ],
        cwd=repository,
        capture_output=True,
        text=True,
        check=True,
    )
    return result.stdout


@pytest.fixture
def git_repository(tmp_path, monkeypatch):
    """Fixture providing an empty git repository as working directory."""
    if shutil.which("git") is None:
        pytest.skip("git is not installed")
    run_git(tmp_path, "init", "-q")
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def git(git_repository):
    """Fixture running git commands inside the test repository."""
    def _git(*args) -> str:
        return run_git(git_repository, *args)
    return _git
