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
from typing import Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from headache.core.comment_style import parse_comment_style
from headache.core.errors import ConfigurationError
from headache.core.template_parser import RESERVED_PARAMETERS
from headache.fs.filesystem import FileSystem

logger = logging.getLogger(__name__)

DEFAULT_CONFIGURATION_PATH = "headache.json"


class PreviousConfiguration(BaseModel):
    """The subset of a configuration needed to rebuild a past header template."""
    model_config = ConfigDict(populate_by_name=True)

    header_file: str = Field(alias="headerFile")
    data: Dict[str, str] = Field(default_factory=dict)


class Configuration(PreviousConfiguration):
    style: str
    includes: List[str] = Field(min_length=1)
    excludes: List[str] = Field(default_factory=list)
    path: Optional[str] = Field(default=None, exclude=True)

    @field_validator("style")
    @classmethod
    def check_style(cls, value: str) -> str:
        try:
            return parse_comment_style(value).name
        except ConfigurationError as e:
            raise ValueError(str(e)) from e

    @field_validator("data")
    @classmethod
    def check_reserved_parameters(cls, value: Dict[str, str]) -> Dict[str, str]:
        for name in RESERVED_PARAMETERS:
            if name in value:
                raise ValueError(f"{name} is a reserved data parameter and cannot be used")
        return value


class ConfigurationLoader:
    def __init__(self, file_system: Optional[FileSystem] = None):
        self.file_system = file_system or FileSystem()

    def load_file(self, path: str) -> Configuration:
        try:
            payload = self.file_system.read(path)
        except OSError as e:
            raise ConfigurationError(f"cannot read configuration file '{path}': {e}") from e
        configuration = self.load_bytes(payload)
        configuration.path = path
        logger.info(f"Loaded configuration from {path}")
        return configuration

    def load_bytes(self, payload: Union[bytes, str]) -> Configuration:
        try:
            return Configuration.model_validate_json(payload)
        except ValidationError as e:
            raise ConfigurationError(report(e)) from e

    def load_previous(self, payload: Union[bytes, str]) -> PreviousConfiguration:
        """Parses a past configuration. Raises pydantic's ValidationError."""
        return PreviousConfiguration.model_validate_json(payload)


def report(error: ValidationError) -> str:
    lines = []
    for detail in error.errors():
        field = ".".join(str(part) for part in detail["loc"]) or "<root>"
        message = detail["msg"].removeprefix("Value error, ")
        lines.append(f"Error with field '{field}': {message}")
    return "\n".join(lines)
