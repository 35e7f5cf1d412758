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
Supported comment styles.

The catalog is a closed, constant table: adding a style means adding a row
to SUPPORTED_STYLES.
"""

from dataclasses import dataclass
from typing import Dict, List, Sequence

from headache.core.errors import ConfigurationError


@dataclass(frozen=True)
class CommentSymbol:
    value: str = ""
    # trailing space may have been formatted away
    optional: bool = False


def symbol(value: str) -> CommentSymbol:
    return CommentSymbol(value=value, optional=value.endswith(" "))


@dataclass(frozen=True)
class CommentStyle:
    name: str
    opening_symbol: CommentSymbol
    continuation_symbol: CommentSymbol
    closing_symbol: CommentSymbol

    @property
    def opening(self) -> str:
        return self.opening_symbol.value

    @property
    def continuation(self) -> str:
        return self.continuation_symbol.value

    @property
    def closing(self) -> str:
        return self.closing_symbol.value


NONE = CommentSymbol()

SUPPORTED_STYLES = (
    CommentStyle("DashDash", NONE, symbol("-- "), NONE),
    CommentStyle("Hash", NONE, symbol("# "), NONE),
    CommentStyle("REM", NONE, symbol("REM "), NONE),
    CommentStyle("SemiColon", NONE, symbol("; "), NONE),
    CommentStyle("SingleQuote", NONE, symbol("' "), NONE),
    CommentStyle("SlashSlash", NONE, symbol("// "), NONE),
    CommentStyle("SlashStar", symbol("/*"), symbol(" * "), symbol(" */")),
    CommentStyle("SlashStarStar", symbol("/**"), symbol(" * "), symbol(" */")),
    CommentStyle("XML", symbol("<!--"), symbol("  "), symbol("-->")),
)


def supported_styles() -> List[CommentStyle]:
    """Supported styles, ordered by name."""
    return sorted(SUPPORTED_STYLES, key=lambda style: style.name)


def supported_style_catalog() -> Dict[str, CommentStyle]:
    return {style.name: style for style in supported_styles()}


def parse_comment_style(name: str) -> CommentStyle:
    for style_name, style in supported_style_catalog().items():
        if style_name.lower() == name.lower():
            return style
    raise ConfigurationError(
        f"unexpected comment style '{name}'\n\tmust be one of: "
        + ",".join(supported_style_catalog().keys())
    )


def apply_comments(lines: Sequence[str], style: CommentStyle) -> List[str]:
    result = []
    if style.opening != "":
        result.append(style.opening)
    for line in lines:
        result.append(_prepend(style, line))
    if style.closing != "":
        result.append(style.closing)
    return result


def _prepend(style: CommentStyle, line: str) -> str:
    # whitespace-only lines are blank, like the detection regex sees them
    if line.strip() == "":
        return style.continuation.rstrip(" ")
    return style.continuation + line
