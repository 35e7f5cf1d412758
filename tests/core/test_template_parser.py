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

"""Tests for the two-pass header rendering."""

import pytest

from headache.core.comment_style import parse_comment_style
from headache.core.errors import ConfigurationError, TemplateSynthesisError
from headache.core.template_parser import (
    RESERVED_PARAMETERS,
    check_reserved_parameters,
    inject_reserved_year_parameters,
    parse_template,
    render_with_reserved_placeholders,
    resolve_years_for_file,
)
from headache.core.tracker import HeaderTemplate, VersionedHeaderTemplate

SLASH_SLASH = parse_comment_style("SlashSlash")


def test_first_pass_keeps_year_placeholders():
    content = render_with_reserved_placeholders(["Copyright {{.Year}} {{.Owner}}"], {"Owner": "ACME"}, SLASH_SLASH)

    assert content == "// Copyright {{.YearRange}} ACME"


def test_first_pass_applies_block_comments():
    lines = ["Copyright {{.StartYear}} {{.Owner}}", "", "All rights reserved"]

    content = render_with_reserved_placeholders(lines, {"Owner": "ACME"}, parse_comment_style("SlashStar"))

    assert content == "/*\n * Copyright {{.StartYear}} ACME\n *\n * All rights reserved\n */"


def test_first_pass_rejects_missing_data():
    with pytest.raises(TemplateSynthesisError) as excinfo:
        render_with_reserved_placeholders(["Copyright {{.Owner}}"], {}, SLASH_SLASH)

    assert "cannot render header template" in str(excinfo.value)


def test_second_pass_renders_year_range():
    content = "// Copyright {{.YearRange}} ACME"

    assert resolve_years_for_file(content, 2014, 2022) == "// Copyright 2014-2022 ACME"
    assert resolve_years_for_file(content, 2022, 2022) == "// Copyright 2022 ACME"


def test_second_pass_renders_start_and_end_years():
    content = "// Copyright {{.StartYear}} to {{.EndYear}}"

    assert resolve_years_for_file(content, 2014, 2022) == "// Copyright 2014 to 2022"


def test_inject_reserved_year_parameters_does_not_mutate_data():
    data = {"Owner": "ACME"}

    injected = inject_reserved_year_parameters(data)

    assert data == {"Owner": "ACME"}
    assert injected["Year"] == "{{.YearRange}}"
    assert set(injected) == {"Owner", *RESERVED_PARAMETERS}


@pytest.mark.parametrize("name", RESERVED_PARAMETERS)
def test_reserved_parameters_are_rejected(name):
    with pytest.raises(ConfigurationError) as excinfo:
        check_reserved_parameters({name: "2020"})

    assert f"{name} is a reserved parameter and is automatically computed" in str(excinfo.value)


def test_parse_template_renders_current_and_detects_previous():
    previous = HeaderTemplate(lines=["Copyright {{.Year}} {{.Company}}"], data={"Company": "Old Corp"})
    current = HeaderTemplate(lines=["Copyright {{.Year}} {{.Owner}}", "Licensed under MIT"], data={"Owner": "ACME"})

    parsed = parse_template(VersionedHeaderTemplate(current=current, previous=previous, revision="abc"), SLASH_SLASH)

    assert parsed.rendered_content == "// Copyright {{.YearRange}} ACME\n// Licensed under MIT"
    assert parsed.detection_regex.search("// Copyright 2016 Old Corp\n\ncode\n") is not None
    assert parsed.detection_regex.search("// Licensed under MIT\n") is None


def test_parse_template_rejects_reserved_parameters():
    template = HeaderTemplate(lines=["Copyright {{.Year}}"], data={"Year": "2020"})

    with pytest.raises(ConfigurationError):
        parse_template(VersionedHeaderTemplate(current=template, previous=template), SLASH_SLASH)
