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

import difflib
import logging
from typing import List

from headache.core.copyright_years import compute_copyright_years
from headache.core.environment import Environment
from headache.core.errors import FileIOError
from headache.core.template_parser import resolve_years_for_file
from headache.vcs.client import FileChange

logger = logging.getLogger(__name__)


class HeaderRewriter:
    """Inserts or replaces the header of every file of a change set."""

    def __init__(self, environment: Environment):
        self.file_system = environment.file_system

    def run(self, change_set) -> int:
        """
        Rewrites files one after the other and returns how many were processed.
        The first failure aborts the batch, files already rewritten stay rewritten.
        """
        for change in change_set.files:
            contents = self._read(change.path)
            new_contents = insert_header(change_set, change, contents)
            self._write(change.path, new_contents)
            logger.debug(f"Wrote header of {change.path}")
        return len(change_set.files)

    def check(self, change_set) -> str:
        """Computes the unified diff of what `run` would change, empty when up to date."""
        diffs: List[str] = []
        for change in change_set.files:
            contents = self._read(change.path)
            new_contents = insert_header(change_set, change, contents)
            if new_contents == contents:
                continue
            diff = difflib.unified_diff(
                contents.splitlines(keepends=True),
                new_contents.splitlines(keepends=True),
                fromfile=f"a/{change.path}",
                tofile=f"b/{change.path}",
            )
            diffs.append("".join(diff))
        return "".join(diffs)

    def _read(self, path: str) -> str:
        try:
            return self.file_system.read(path).decode("utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise FileIOError(f"cannot read '{path}': {e}", path) from e

    def _write(self, path: str, contents: str) -> None:
        try:
            with self.file_system.open(path, "w") as f:
                f.write(contents)
        except OSError as e:
            raise FileIOError(f"cannot write '{path}': {e}", path) from e


def insert_header(change_set, change: FileChange, contents: str) -> str:
    existing_header = ""
    match = change_set.header_regex.search(contents)
    if match:
        existing_header = match.group(0)
        contents = (contents[:match.start()] + contents[match.end():]).lstrip("\n")

    start_year, end_year = compute_copyright_years(change, existing_header)
    final_header = resolve_years_for_file(change_set.header_contents, start_year, end_year)
    return f"{final_header}\n\n{contents}"
