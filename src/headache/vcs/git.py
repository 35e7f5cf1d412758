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
Raw git command layer.

Every call is a blocking `git` subprocess; failures surface as VcsError
carrying git's own stderr.
"""

import logging
import os
import subprocess
from typing import List

from headache.core.errors import VcsError

logger = logging.getLogger(__name__)


class Git:
    def root(self) -> str:
        return self._git("rev-parse", "--show-toplevel").strip("\n")

    def latest_revision(self, path: str) -> str:
        """Returns the latest commit touching `path`, or an empty string if none."""
        return self.log("-1", "--format=%H", "--", path).strip("\n")

    def show_content_at_revision(self, path: str, revision: str) -> str:
        if revision == "":
            return ""
        full_revision = self._git("rev-parse", revision).strip("\n")
        return self._git("cat-file", "-p", f"{full_revision}:{self._revision_path(path)}")

    def status(self, *args: str) -> str:
        return self._git("status", *args)

    def diff(self, *args: str) -> str:
        return self._git("diff", *args)

    def log(self, *args: str) -> str:
        return self._git("log", *args)

    def _revision_path(self, path: str) -> str:
        # <rev>:<path> is relative to the repository root unless prefixed by ./
        if os.path.isabs(path):
            root = os.path.realpath(self.root())
            return os.path.relpath(os.path.realpath(path), root).replace(os.sep, "/")
        return "./" + os.path.normpath(path).replace(os.sep, "/")

    def _git(self, *args: str) -> str:
        command: List[str] = ["git", *args]
        logger.debug(f"Running: {' '.join(command)}")
        try:
            result = subprocess.run(command, capture_output=True, text=True, check=True)
        except FileNotFoundError as e:
            raise VcsError(f"git executable not found: {e}") from e
        except subprocess.CalledProcessError as e:
            stderr = (e.stderr or "").strip()
            raise VcsError(f"'{' '.join(command)}' failed: {stderr}") from e
        return result.stdout
