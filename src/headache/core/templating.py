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
Header templates use `{{.Name}}` placeholders.

Only `{{.` ... `}}` is meaningful: block and comment delimiters are moved
out of the way so that `{%` or `{#` in a license text stay literal.
"""

from typing import Mapping

from jinja2 import Environment, StrictUndefined, TemplateError

from headache.core.errors import TemplateSynthesisError

_environment = Environment(
    variable_start_string="{{.",
    variable_end_string="}}",
    block_start_string="{{%",
    block_end_string="%}}",
    comment_start_string="{{#",
    comment_end_string="#}}",
    undefined=StrictUndefined,
    keep_trailing_newline=True,
    autoescape=False,
)


def render(name: str, source: str, values: Mapping[str, object]) -> str:
    """Render `source` with `values`, any parse or render failure is fatal."""
    try:
        return _environment.from_string(source).render(dict(values))
    except TemplateError as e:
        raise TemplateSynthesisError(f"cannot render {name} template: {e}") from e
