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
Execution tracking.

Each successful run records the configuration and header template it used in
a tracker file at the repository root. The next run compares that snapshot,
as of the tracker file's latest commit, with the current one to decide
between an incremental and a full scan.

Three tracker formats are understood, newest first:

    encoded_configuration:<base64>      configuration and header template
    encoded_header:<base64>             contents, both base64-encoded

    configuration:<path>                path of the configuration file, read
                                        back from git at the tracked revision

    anything else                       the current configuration path is
                                        read back from git instead
"""

import base64
import binascii
import logging
import os
import stat
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Tuple

from pydantic import ValidationError

from headache.core.config import Configuration, ConfigurationLoader
from headache.core.environment import Environment
from headache.core.errors import FileIOError, TrackerFormatError, VcsError

logger = logging.getLogger(__name__)

TRACKER_FILE_NAME = ".headache-run"
DEFAULT_TRACKER_PERMISSIONS = 0o640

ENCODED_CONFIGURATION_PREFIX = "encoded_configuration:"
ENCODED_HEADER_PREFIX = "encoded_header:"
CONFIGURATION_PREFIX = "configuration:"


@dataclass
class HeaderTemplate:
    lines: List[str]
    data: Dict[str, str] = field(default_factory=dict)


@dataclass
class VersionedHeaderTemplate:
    current: HeaderTemplate
    previous: HeaderTemplate
    revision: str = ""

    def requires_full_scan(self) -> bool:
        return (
            self.revision == ""
            or self.current.lines != self.previous.lines
            or set(self.current.data) != set(self.previous.data)
        )


def split_lines(contents: str) -> List[str]:
    return contents.rstrip("\n").split("\n")


class ExecutionTracker:
    def __init__(self, environment: Environment, config_loader: Optional[ConfigurationLoader] = None):
        self.versioning = environment.versioning_client.vcs
        self.file_system = environment.file_system
        self.clock = environment.clock
        self.config_loader = config_loader or ConfigurationLoader(environment.file_system)

    def retrieve_versioned_template(self, configuration: Configuration) -> VersionedHeaderTemplate:
        current = HeaderTemplate(
            lines=split_lines(self._read_text(configuration.header_file)),
            data=dict(configuration.data),
        )
        tracker_path, tracker_stat = self._tracker_file()
        if tracker_stat is None:
            logger.debug(f"No tracker file found at {tracker_path}")
            return VersionedHeaderTemplate(current=current, previous=current, revision="")

        try:
            revision = self.versioning.latest_revision(tracker_path)
        except VcsError as e:
            raise VcsError(f"could not detect previous execution's revision: {e}") from e
        if revision == "":
            logger.debug(f"Tracker file {tracker_path} has never been committed")
            return VersionedHeaderTemplate(current=current, previous=current, revision="")

        tracker_contents = self._read_text(tracker_path)
        previous = self._parse_tracker_contents(tracker_contents, revision, configuration)
        return VersionedHeaderTemplate(current=current, previous=previous, revision=revision)

    def track_execution(self, configuration_path: str) -> None:
        tracker_path, tracker_stat = self._tracker_file()
        permissions = DEFAULT_TRACKER_PERMISSIONS
        if tracker_stat is not None:
            permissions = stat.S_IMODE(tracker_stat.st_mode)

        configuration_bytes = self._read(configuration_path)
        try:
            header_file = self.config_loader.load_previous(configuration_bytes).header_file
        except ValidationError as e:
            raise TrackerFormatError(f"could not unmarshal configuration '{configuration_path}': {e}") from e
        header_bytes = self._read(header_file)

        contents = (
            f"# Generated by headache | {int(self.clock.now().timestamp())} -- commit me!\n"
            f"{ENCODED_CONFIGURATION_PREFIX}{_encode(configuration_bytes)}\n"
            f"{ENCODED_HEADER_PREFIX}{_encode(header_bytes)}\n"
        )
        try:
            self.file_system.write(tracker_path, contents, permissions)
        except OSError as e:
            raise FileIOError(f"cannot write tracker file '{tracker_path}': {e}", tracker_path) from e
        logger.info(f"Execution tracked in {tracker_path}")

    def _parse_tracker_contents(self, contents: str, revision: str, configuration: Configuration) -> HeaderTemplate:
        parsers: List[Callable[[str, str, Configuration], Optional[HeaderTemplate]]] = [
            self._parse_encoded,
            self._parse_configuration_path,
            self._parse_untracked,
        ]
        for parser in parsers:
            template = parser(contents, revision, configuration)
            if template is not None:
                return template
        raise TrackerFormatError("cannot parse tracker file contents")

    def _parse_encoded(self, contents: str, revision: str, configuration: Configuration) -> Optional[HeaderTemplate]:
        encoded_configuration = _find_prefixed(contents, ENCODED_CONFIGURATION_PREFIX)
        if encoded_configuration is None:
            return None
        try:
            configuration_bytes = _decode(encoded_configuration)
        except (binascii.Error, ValueError) as e:
            raise TrackerFormatError(f"could not decode encoded configuration: {e}") from e
        try:
            previous_configuration = self.config_loader.load_previous(configuration_bytes)
        except ValidationError as e:
            raise TrackerFormatError(f"could not unmarshal decoded configuration: {e}") from e

        encoded_header = _find_prefixed(contents, ENCODED_HEADER_PREFIX)
        if encoded_header is None:
            raise TrackerFormatError("cannot retrieve encoded header template")
        try:
            header = _decode(encoded_header).decode("utf-8")
        except (binascii.Error, ValueError) as e:
            raise TrackerFormatError(f"could not decode encoded header template: {e}") from e
        return HeaderTemplate(lines=split_lines(header), data=dict(previous_configuration.data))

    def _parse_configuration_path(self, contents: str, revision: str, configuration: Configuration) -> Optional[HeaderTemplate]:
        configuration_path = _find_prefixed(contents, CONFIGURATION_PREFIX)
        if configuration_path is None:
            return None
        return self._template_at_revision(configuration_path, revision)

    def _parse_untracked(self, contents: str, revision: str, configuration: Configuration) -> Optional[HeaderTemplate]:
        # oldest installations did not record anything usable
        if configuration.path is None:
            raise TrackerFormatError("cannot retrieve previous configuration: current configuration path is unknown")
        return self._template_at_revision(configuration.path, revision)

    def _template_at_revision(self, configuration_path: str, revision: str) -> HeaderTemplate:
        configuration_contents = self.versioning.show_content_at_revision(configuration_path, revision)
        try:
            previous_configuration = self.config_loader.load_previous(configuration_contents)
        except ValidationError as e:
            raise TrackerFormatError(
                f"could not unmarshal configuration '{configuration_path}' at revision {revision}: {e}"
            ) from e
        header = self.versioning.show_content_at_revision(previous_configuration.header_file, revision)
        return HeaderTemplate(lines=split_lines(header), data=dict(previous_configuration.data))

    def _tracker_file(self) -> Tuple[str, Optional[os.stat_result]]:
        """Returns the tracker path and its stats, None if it does not exist yet."""
        root = self.versioning.root()
        tracker_path = os.path.join(root, TRACKER_FILE_NAME)
        try:
            tracker_stat = self.file_system.stat(tracker_path)
        except FileNotFoundError:
            return tracker_path, None
        except OSError as e:
            raise FileIOError(f"cannot stat tracker file '{tracker_path}': {e}", tracker_path) from e
        if not stat.S_ISREG(tracker_stat.st_mode):
            raise FileIOError(f"'{tracker_path}' should be a regular file", tracker_path)
        return tracker_path, tracker_stat

    def _read(self, path: str) -> bytes:
        try:
            return self.file_system.read(path)
        except OSError as e:
            raise FileIOError(f"cannot read '{path}': {e}", path) from e

    def _read_text(self, path: str) -> str:
        try:
            return self._read(path).decode("utf-8")
        except UnicodeDecodeError as e:
            raise FileIOError(f"cannot read '{path}': {e}", path) from e


def _find_prefixed(contents: str, prefix: str) -> Optional[str]:
    for line in contents.split("\n"):
        line = line.strip()
        if line.startswith(prefix):
            return line[len(prefix):]
    return None


def _encode(contents: bytes) -> str:
    return base64.b64encode(contents).decode("ascii")


def _decode(contents: str) -> bytes:
    return base64.b64decode(contents, validate=True)
