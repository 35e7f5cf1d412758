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
Header detection regex synthesis.

The regex is built in two steps. First, every template line becomes a
"matching line" where literal text sits between \\Q and \\E quote markers
and the template placeholders are left untouched. Then the placeholders are
rendered with a wildcard that closes and reopens the quoted section, and the
quoted sections are finally escaped. The resulting pattern recognizes a
header whatever the comment style, whitespace, trailing punctuation or data
values used when it was written.
"""

import re
from typing import Callable, List, Mapping, Sequence

from headache.core.comment_style import CommentStyle, CommentSymbol, supported_styles
from headache.core.templating import render

WHITESPACE = r"[\t\v\f\r ]"
QUOTE_START = r"\Q"
QUOTE_END = r"\E"
# both close and reopen a quoted literal section
WILDCARD = r"\E.*\Q"
IGNORED = r"\E.?\Q"

_SKIPPED_PUNCTUATION = ",;:?!"
_WHITESPACE_RUN = re.compile(r"([\t\v\f\r ])\1*")
_WHITESPACE_ESCAPES = {"\t": r"\t", "\v": r"\v", "\f": r"\f", "\r": r"\r", " ": " "}
_QUOTED_SECTION = re.compile(r"\\Q(.*?)\\E", re.DOTALL)


def compute_header_detection_regex(lines: Sequence[str], data: Mapping[str, str]) -> str:
    unprocessed_regex = "".join(compute_regex(lines))
    return inject_data_regex(unprocessed_regex, data)


def compute_regex(lines: Sequence[str]) -> List[str]:
    styles = supported_styles()
    result = [flags(), opening_line(styles)]
    for line in lines:
        if line.strip() == "":
            continue
        result.append(commented_empty_line(styles))
        result.append(matching_line(line, styles))
    result.append(commented_empty_line(styles))
    result.append(closing_line(styles))
    return result


def flags() -> str:
    return "(?im)"


def opening_line(styles: Sequence[CommentStyle]) -> str:
    symbols = combine_regexes(styles, lambda style: style.opening_symbol)
    return f"({WHITESPACE}*{symbols}{WHITESPACE}*\\n)?"


def matching_line(line: str, styles: Sequence[CommentStyle]) -> str:
    symbols = combine_regexes(styles, lambda style: style.continuation_symbol)
    return (
        f"{WHITESPACE}*{symbols}?{WHITESPACE}*"
        + QUOTE_START + normalize_punctuation(line) + QUOTE_END
        + r"[,.;:?!\t\v\f\r ]*\n?"
    )


def closing_line(styles: Sequence[CommentStyle]) -> str:
    symbols = combine_regexes(styles, lambda style: style.closing_symbol)
    return f"(?:{WHITESPACE}*{symbols}{WHITESPACE}*)?"


def commented_empty_line(styles: Sequence[CommentStyle]) -> str:
    symbols = combine_regexes(styles, lambda style: style.continuation_symbol)
    return f"(?:{symbols}?\\n)*"


def normalize_punctuation(line: str) -> str:
    """
    Makes trailing punctuation and whitespace amounts irrelevant.

    A dot is only ignored when it ends the line or precedes a space: dots in
    placeholders must be kept, dots in numbers and URLs should be. This is a
    heuristic (there is no lookbehind involved): a dot directly followed by
    anything other than a space is always required.
    """
    normalized = []
    for index, char in enumerate(line):
        if char in _SKIPPED_PUNCTUATION:
            normalized.append(IGNORED)
        elif char == "." and (index == len(line) - 1 or line[index:index + 2] == ". "):
            normalized.append(IGNORED)
        else:
            normalized.append(char)
    return _WHITESPACE_RUN.sub(
        lambda match: QUOTE_END + _WHITESPACE_ESCAPES[match.group(1)] + "+" + QUOTE_START,
        "".join(normalized),
    )


def combine_regexes(styles: Sequence[CommentStyle], get_symbol: Callable[[CommentStyle], CommentSymbol]) -> str:
    regexes = []
    for style in styles:
        comment_symbol = get_symbol(style)
        if comment_symbol.value == "":
            continue
        regex = re.escape(comment_symbol.value)
        if comment_symbol.optional:
            # make the escaped trailing space optional
            regex += "?"
        regexes.append(regex)
    return f"(?:{'|'.join(regexes)})"


def inject_data_regex(regex: str, data: Mapping[str, str]) -> str:
    rendered = render("header-regex", regex, regex_values(data))
    return unquote(rendered)


def regex_values(data: Mapping[str, str]) -> dict:
    return {key: WILDCARD for key in data}


def unquote(regex: str) -> str:
    """Replaces every \\Q...\\E section by its escaped contents."""
    return _QUOTED_SECTION.sub(lambda match: re.escape(match.group(1)), regex)
