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
File system port.

Core components never touch `os`/`open` directly so tests can substitute
a mock for this class.
"""

import os
import stat
from typing import IO


class FileSystem:
    """Thin wrapper over the local file system."""

    def read(self, path: str) -> bytes:
        with open(path, "rb") as f:
            return f.read()

    def open(self, path: str, mode: str = "r") -> IO:
        if "b" in mode:
            return open(path, mode)
        return open(path, mode, encoding="utf-8", newline="")

    def write(self, path: str, contents: str, permissions: int) -> None:
        """Create or truncate `path`, write `contents` and apply `permissions`."""
        with open(path, "w", encoding="utf-8", newline="") as f:
            f.write(contents)
        os.chmod(path, permissions)

    def stat(self, path: str) -> os.stat_result:
        return os.stat(path)

    def is_file(self, path: str) -> bool:
        try:
            info = self.stat(path)
        except OSError:
            return False
        return stat.S_ISREG(info.st_mode)
