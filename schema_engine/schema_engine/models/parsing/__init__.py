# Copyright 2025 TIER IV, inc.
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

from .schema_builder import (
    build_root_schema,
    build_schema,
    check_metaschema,
    collect_schema_issues,
    parse_schema,
    to_document,
)
from .yaml_parser import YamlParser, yaml_parser

__all__ = [
    "YamlParser",
    "build_root_schema",
    "build_schema",
    "check_metaschema",
    "collect_schema_issues",
    "parse_schema",
    "to_document",
    "yaml_parser",
]
