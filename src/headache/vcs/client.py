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

import logging
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Dict, List, Optional, Sequence

from headache.core.errors import VcsError

logger = logging.getLogger(__name__)

# git log --name-status statuses of history entries that did not touch contents
PURE_MOVE_STATUSES = ("R100", "C100")


@dataclass(frozen=True)
class FileChange:
    path: str
    creation_year: int = 0
    last_edition_year: int = 0


@dataclass
class FileHistory:
    creation_year: int
    last_edition_year: int


class VersioningClient:
    """Turns raw git output into FileChange values."""

    def __init__(self, vcs):
        self.vcs = vcs

    def get_changes(self, revision: str) -> List[FileChange]:
        """Committed changes since `revision` plus uncommitted ones, deduplicated by path."""
        committed = get_committed_changes(self.vcs, revision)
        uncommitted = get_uncommitted_changes(self.vcs)
        return merge(committed, uncommitted)

    def add_metadata(self, changes: Sequence[FileChange], clock) -> List[FileChange]:
        result = []
        for change in changes:
            history = get_file_history(self.vcs, change.path, clock)
            result.append(replace(
                change,
                creation_year=history.creation_year,
                last_edition_year=history.last_edition_year,
            ))
        return result


def get_committed_changes(vcs, revision: str) -> List[FileChange]:
    output = vcs.diff("--name-status", f"{revision}..HEAD")
    result = []
    for line in output.split("\n"):
        if line == "":
            continue
        fields = line.split("\t")
        status = fields[0].strip()
        if status == "D":
            continue
        if status.startswith(("R", "C")):
            # renamed or copied: old path, then new path
            result.append(FileChange(path=fields[2].strip()))
        else:
            result.append(FileChange(path=fields[1].strip()))
    return result


def get_uncommitted_changes(vcs) -> List[FileChange]:
    output = vcs.status("--porcelain", "--untracked-files=all")
    result = []
    for line in output.split("\n"):
        if line.strip() == "":
            continue
        statuses, path = line[:2], line[3:]
        if "D" in statuses:
            continue
        if " -> " in path:
            path = path.split(" -> ", 1)[1]
        result.append(FileChange(path=path.strip().strip('"')))
    return result


def get_file_history(vcs, path: str, clock) -> FileHistory:
    output = vcs.log("--follow", "--format=%at", "--name-status", "--", path)
    timestamps = _content_change_timestamps(output)
    default_year = clock.now().year
    history = FileHistory(creation_year=default_year, last_edition_year=default_year)
    if len(timestamps) > 0:
        history.creation_year = _year(timestamps[-1])
    if len(timestamps) > 1:
        history.last_edition_year = _year(timestamps[0])
    return history


def _content_change_timestamps(output: str) -> List[str]:
    """
    Extracts commit timestamps (newest first) from `git log --format=%at --name-status`,
    skipping commits that only renamed or copied the file.
    """
    timestamps: List[str] = []
    current: Optional[str] = None
    for line in output.split("\n"):
        line = line.strip()
        if line == "":
            continue
        if line.isdigit():
            if current is not None:
                timestamps.append(current)
            current = line
            continue
        if current is not None and line.split("\t", 1)[0] in PURE_MOVE_STATUSES:
            current = None
    if current is not None:
        timestamps.append(current)
    return timestamps


def _year(timestamp: str) -> int:
    try:
        return datetime.fromtimestamp(int(timestamp)).year
    except ValueError as e:
        raise VcsError(f"unexpected commit timestamp '{timestamp}': {e}") from e


def merge(changes: Sequence[FileChange], other_changes: Sequence[FileChange]) -> List[FileChange]:
    by_path: Dict[str, FileChange] = {}
    for change in [*changes, *other_changes]:
        by_path.setdefault(change.path, change)
    return list(by_path.values())
