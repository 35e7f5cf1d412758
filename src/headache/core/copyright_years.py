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

import re
from typing import Tuple

from headache.vcs.client import FileChange

YEAR_RANGE = re.compile(r"(\d{4})(?:\s*-\s*(\d{4}))?")


def compute_copyright_years(change: FileChange, existing_header: str) -> Tuple[int, int]:
    """
    Computes the (start, end) copyright years of a file.

    A start year already present in the existing header is kept when it is
    earlier than the creation year found in history, so back-dated headers
    survive. The end year collapses onto the start year when the file was
    not edited after its creation year.
    """
    start_year = change.creation_year
    match = YEAR_RANGE.search(existing_header)
    if match:
        existing_start_year = int(match.group(1))
        if start_year == 0 or existing_start_year < start_year:
            start_year = existing_start_year

    end_year = start_year
    if change.last_edition_year != 0 and change.last_edition_year != start_year:
        end_year = change.last_edition_year
    return start_year, end_year


def format_year_range(start_year: int, end_year: int) -> str:
    if start_year == end_year:
        return str(start_year)
    return f"{start_year}-{end_year}"
