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
Error taxonomy for headache.

Every failure is fatal: the CLI catches HeadacheError subclasses and reports
them with a stage-specific prefix (see `stage` below).
"""


class HeadacheError(Exception):
    """Base exception for headache errors."""
    stage = "execution"


class ConfigurationError(HeadacheError):
    """Raised when the configuration is invalid (reserved parameter, unknown style...)."""
    stage = "configuration"


class TemplateSynthesisError(HeadacheError):
    """Raised when the header template or its detection regex cannot be built."""
    stage = "template"


class TrackerFormatError(HeadacheError):
    """Raised when the tracker record cannot be decoded or parsed."""
    stage = "tracker"


class VcsError(HeadacheError):
    """Raised when a version control command fails."""
    stage = "vcs"


class FileIOError(HeadacheError):
    """Raised when a file cannot be read, opened or written."""
    stage = "execution"

    def __init__(self, message: str, path: str = ""):
        self.path = path
        super().__init__(message)
