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

from dataclasses import dataclass, field
from datetime import datetime

from headache.fs.filesystem import FileSystem
from headache.vcs.client import VersioningClient
from headache.vcs.git import Git


class SystemClock:
    def now(self) -> datetime:
        return datetime.now()


@dataclass
class Environment:
    """Collaborators shared by every component of a single run."""
    versioning_client: VersioningClient
    file_system: FileSystem = field(default_factory=FileSystem)
    clock: SystemClock = field(default_factory=SystemClock)


def default_environment() -> Environment:
    return Environment(versioning_client=VersioningClient(Git()))
