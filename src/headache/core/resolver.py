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
import re
from dataclasses import dataclass, field
from typing import List

from headache.core.comment_style import parse_comment_style
from headache.core.config import Configuration
from headache.core.environment import Environment
from headache.core.template_parser import parse_template
from headache.core.tracker import ExecutionTracker, VersionedHeaderTemplate
from headache.fs.path_matcher import PathMatcher
from headache.vcs.client import FileChange

logger = logging.getLogger(__name__)


@dataclass
class ChangeSet:
    header_contents: str
    header_regex: re.Pattern
    files: List[FileChange] = field(default_factory=list)


class ChangeSetResolver:
    def __init__(self, environment: Environment, tracker: ExecutionTracker, path_matcher: PathMatcher):
        self.environment = environment
        self.tracker = tracker
        self.path_matcher = path_matcher

    def resolve(self, configuration: Configuration) -> ChangeSet:
        versioned_template = self.tracker.retrieve_versioned_template(configuration)
        parsed_template = parse_template(versioned_template, parse_comment_style(configuration.style))
        files = self._affected_files(configuration, versioned_template)
        return ChangeSet(
            header_contents=parsed_template.rendered_content,
            header_regex=parsed_template.detection_regex,
            files=files,
        )

    def _affected_files(self, configuration: Configuration, versioned_template: VersionedHeaderTemplate) -> List[FileChange]:
        versioning_client = self.environment.versioning_client
        file_system = self.environment.file_system

        if versioned_template.requires_full_scan():
            if versioned_template.revision == "":
                logger.info("Unable to get last execution revision, triggering a full scan")
            else:
                logger.info(
                    "Configuration and/or license header template changed since last execution "
                    f"({versioned_template.revision}), triggering a full scan"
                )
            changes = self.path_matcher.scan_all_files(configuration.includes, configuration.excludes, file_system)
        else:
            revision = versioned_template.revision
            logger.info(f"Scanning changes since revision {revision}")
            vcs_changes = versioning_client.get_changes(revision)
            changes = self.path_matcher.match_files(vcs_changes, configuration.includes, configuration.excludes, file_system)
        return versioning_client.add_metadata(changes, self.environment.clock)
