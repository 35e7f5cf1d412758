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
from unittest.mock import MagicMock

import pytest

from headache.core.config import Configuration
from headache.core.environment import Environment
from headache.core.resolver import ChangeSetResolver
from headache.core.tracker import HeaderTemplate, VersionedHeaderTemplate
from headache.vcs.client import FileChange

CURRENT = HeaderTemplate(lines=["Copyright {{.Year}} {{.Owner}}"], data={"Owner": "ACME"})


@pytest.fixture
def environment(fixed_clock):
    return Environment(versioning_client=MagicMock(), file_system=MagicMock(), clock=fixed_clock)


@pytest.fixture
def tracker():
    return MagicMock()


@pytest.fixture
def path_matcher():
    return MagicMock()


@pytest.fixture
def resolver(environment, tracker, path_matcher):
    return ChangeSetResolver(environment, tracker, path_matcher)


@pytest.fixture
def configuration():
    return Configuration(
        header_file="header.txt",
        style="Hash",
        includes=["**/*.py"],
        excludes=["build/**"],
        data={"Owner": "ACME"},
    )


def test_full_scan_without_previous_execution(resolver, environment, tracker, path_matcher, configuration, caplog):
    caplog.set_level(logging.INFO, logger="headache")
    tracker.retrieve_versioned_template.return_value = VersionedHeaderTemplate(current=CURRENT, previous=CURRENT)
    scanned = [FileChange(path="a.py")]
    path_matcher.scan_all_files.return_value = scanned
    with_metadata = [FileChange(path="a.py", creation_year=2020, last_edition_year=2022)]
    environment.versioning_client.add_metadata.return_value = with_metadata

    change_set = resolver.resolve(configuration)

    path_matcher.scan_all_files.assert_called_once_with(["**/*.py"], ["build/**"], environment.file_system)
    environment.versioning_client.get_changes.assert_not_called()
    environment.versioning_client.add_metadata.assert_called_once_with(scanned, environment.clock)
    assert change_set.files == with_metadata
    assert change_set.header_contents == "# Copyright {{.YearRange}} ACME"
    assert change_set.header_regex.search("# Copyright 2020 ACME\n") is not None
    assert "Unable to get last execution revision, triggering a full scan" in caplog.text


def test_incremental_scan_when_template_is_unchanged(resolver, environment, tracker, path_matcher, configuration, caplog):
    caplog.set_level(logging.INFO, logger="headache")
    tracker.retrieve_versioned_template.return_value = VersionedHeaderTemplate(
        current=CURRENT, previous=CURRENT, revision="abc123"
    )
    changes = [FileChange(path="a.py"), FileChange(path="README.md")]
    environment.versioning_client.get_changes.return_value = changes
    path_matcher.match_files.return_value = changes[:1]

    resolver.resolve(configuration)

    environment.versioning_client.get_changes.assert_called_once_with("abc123")
    path_matcher.match_files.assert_called_once_with(changes, ["**/*.py"], ["build/**"], environment.file_system)
    path_matcher.scan_all_files.assert_not_called()
    environment.versioning_client.add_metadata.assert_called_once_with(changes[:1], environment.clock)
    assert "Scanning changes since revision abc123" in caplog.text


def test_full_scan_when_template_changed(resolver, environment, tracker, path_matcher, configuration, caplog):
    caplog.set_level(logging.INFO, logger="headache")
    previous = HeaderTemplate(lines=["Copyright {{.Owner}}"], data={"Owner": "ACME"})
    tracker.retrieve_versioned_template.return_value = VersionedHeaderTemplate(
        current=CURRENT, previous=previous, revision="abc123"
    )

    resolver.resolve(configuration)

    path_matcher.scan_all_files.assert_called_once()
    environment.versioning_client.get_changes.assert_not_called()
    assert (
        "Configuration and/or license header template changed since last execution (abc123), "
        "triggering a full scan"
    ) in caplog.text
