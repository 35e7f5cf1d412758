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

import fnmatch
import glob
import logging
import os
from typing import List, Sequence

from headache.fs.filesystem import FileSystem
from headache.vcs.client import FileChange

logger = logging.getLogger(__name__)


class PathMatcher:
    """Selects files according to include/exclude glob patterns."""

    def scan_all_files(
        self, includes: Sequence[str], excludes: Sequence[str], file_system: FileSystem
    ) -> List[FileChange]:
        """Scans all local files based on the provided inclusion and exclusion patterns."""
        result: List[FileChange] = []
        seen = set()
        for include in includes:
            for matched_path in sorted(glob.glob(include, recursive=True)):
                if matched_path in seen or is_excluded(matched_path, excludes, file_system):
                    continue
                seen.add(matched_path)
                result.append(FileChange(path=matched_path))
        logger.debug(f"Full scan matched {len(result)} file(s)")
        return result

    def match_files(
        self,
        changes: Sequence[FileChange],
        includes: Sequence[str],
        excludes: Sequence[str],
        file_system: FileSystem,
    ) -> List[FileChange]:
        """Keeps the changes matching the provided inclusion and exclusion patterns."""
        return [
            change for change in changes
            if matches_any(change.path, includes) and not is_excluded(change.path, excludes, file_system)
        ]


def is_excluded(path: str, excludes: Sequence[str], file_system: FileSystem) -> bool:
    return not file_system.is_file(path) or matches_any(path, excludes)


def matches_any(path: str, patterns: Sequence[str]) -> bool:
    return any(matches_pattern(path, pattern) for pattern in patterns)


def matches_pattern(path: str, pattern: str) -> bool:
    """
    Glob matching where `**` spans zero or more directories and every other
    segment follows fnmatch rules without crossing `/`.
    """
    path_parts = _split(path)
    pattern_parts = _split(pattern)
    return _match_parts(path_parts, pattern_parts)


def _split(path: str) -> List[str]:
    normalized = os.path.normpath(path).replace(os.sep, "/")
    return [part for part in normalized.split("/") if part not in ("", ".")]


def _match_parts(path_parts: List[str], pattern_parts: List[str]) -> bool:
    if not pattern_parts:
        return not path_parts
    head, rest = pattern_parts[0], pattern_parts[1:]
    if head == "**":
        # zero directories, or consume one and try again
        if _match_parts(path_parts, rest):
            return True
        return bool(path_parts) and _match_parts(path_parts[1:], pattern_parts)
    if not path_parts:
        return False
    return fnmatch.fnmatchcase(path_parts[0], head) and _match_parts(path_parts[1:], rest)
