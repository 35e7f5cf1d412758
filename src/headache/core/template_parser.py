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
Two-pass header rendering.

The first pass comments the template lines and injects the configured data,
leaving the year placeholders in place. The second pass runs once per file,
when that file's copyright years are known.
"""

import re
from dataclasses import dataclass
from typing import Dict, Mapping, Sequence

from headache.core.comment_style import CommentStyle, apply_comments
from headache.core.copyright_years import format_year_range
from headache.core.errors import ConfigurationError, TemplateSynthesisError
from headache.core.header_detector import compute_header_detection_regex
from headache.core.templating import render

# "Year" is deprecated, it is kept as an alias of "YearRange"
RESERVED_PARAMETERS = ("Year", "YearRange", "StartYear", "EndYear")


@dataclass(frozen=True)
class ParsedTemplate:
    rendered_content: str
    detection_regex: re.Pattern


def parse_template(versioned_template, style: CommentStyle) -> ParsedTemplate:
    """
    Renders the current header and computes the regex detecting the previous one,
    since the previous configuration is the one that produced what is on disk.
    """
    current = versioned_template.current
    previous = versioned_template.previous
    check_reserved_parameters(current.data)

    content = render_with_reserved_placeholders(current.lines, current.data, style)
    regex = compute_header_detection_regex(previous.lines, inject_reserved_year_parameters(previous.data))
    try:
        detection_regex = re.compile(regex)
    except re.error as e:
        raise TemplateSynthesisError(f"invalid header detection regex: {e}") from e
    return ParsedTemplate(rendered_content=content, detection_regex=detection_regex)


def check_reserved_parameters(data: Mapping[str, str]) -> None:
    for name in RESERVED_PARAMETERS:
        if name in data:
            raise ConfigurationError(
                f"{name} is a reserved parameter and is automatically computed.\n"
                "Please remove it from your configuration"
            )


def inject_reserved_year_parameters(data: Mapping[str, str]) -> Dict[str, str]:
    """Maps reserved parameters to placeholders, resolved file by file later on."""
    result = dict(data)
    result["Year"] = "{{.YearRange}}"
    result["YearRange"] = "{{.YearRange}}"
    result["StartYear"] = "{{.StartYear}}"
    result["EndYear"] = "{{.EndYear}}"
    return result


def render_with_reserved_placeholders(lines: Sequence[str], data: Mapping[str, str], style: CommentStyle) -> str:
    commented_lines = apply_comments(lines, style)
    return render("header", "\n".join(commented_lines), inject_reserved_year_parameters(data))


def resolve_years_for_file(rendered_content: str, start_year: int, end_year: int) -> str:
    year_range = format_year_range(start_year, end_year)
    return render("header-second-pass", rendered_content, {
        "Year": year_range,
        "YearRange": year_range,
        "StartYear": start_year,
        "EndYear": end_year,
    })
