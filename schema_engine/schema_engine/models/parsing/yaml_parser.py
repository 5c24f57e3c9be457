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

"""JSON/YAML document loader with JSON Pointer source maps and optional caching."""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

import yaml

from ...config import engine_config
from ...exceptions import DocumentLoadError
from ...utils.json_pointer import join_path
from ...utils.source_location import SourceMap

logger = logging.getLogger(__name__)

JSON_SUFFIXES = (".json",)
YAML_SUFFIXES = (".yaml", ".yml")


class JsonSafeLoader(yaml.SafeLoader):
    """``SafeLoader`` that keeps unquoted timestamps as strings.

    JSON has no date type, so ``2024-01-01`` must reach the validator as text
    for ``format: date`` to apply.
    """


JsonSafeLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag != "tag:yaml.org,2002:timestamp"]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


class YamlParser:
    """Loads schema and instance documents.

    ``.json`` files are decoded with :mod:`json` (PyYAML implements YAML 1.1,
    which reads ``1e5`` as a string); everything else goes through
    :class:`JsonSafeLoader`. Both get a source map built from PyYAML's node tree.
    """

    def __init__(self, cache_enabled: Optional[bool] = None):
        """Initialize the parser.

        Args:
            cache_enabled: Whether to cache loaded files. If None, uses global config.
        """
        self.cache_enabled = cache_enabled if cache_enabled is not None else engine_config.cache_enabled
        self._cache: Dict[Path, Tuple[Any, SourceMap]] = {}

    @staticmethod
    def build_source_map(content: str) -> SourceMap:
        """Map JSON Pointers to 1-based line/column using ``yaml.compose``."""
        source_map: SourceMap = {}

        try:
            root = yaml.compose(content, Loader=yaml.SafeLoader)
        except yaml.YAMLError:
            # Parsing errors are reported by the loader itself.
            return source_map

        if root is None:
            return source_map

        def _record(path: str, node) -> None:
            mark = getattr(node, "start_mark", None)
            if mark is None:
                return
            source_map[path] = {"line": int(mark.line) + 1, "column": int(mark.column) + 1}

        def _walk(node, path: str) -> None:
            _record(path, node)

            if isinstance(node, yaml.nodes.MappingNode):
                for key_node, value_node in node.value:
                    key = getattr(key_node, "value", None)
                    if key is None:
                        continue
                    _walk(value_node, join_path(path, str(key)))
            elif isinstance(node, yaml.nodes.SequenceNode):
                for idx, item_node in enumerate(node.value):
                    _walk(item_node, join_path(path, idx))

        _walk(root, "")
        return source_map

    def load_document_from_string(self, content: str, fmt: str = "yaml") -> Tuple[Any, SourceMap]:
        """Parse ``content`` as ``fmt`` ("json" or "yaml") and return (data, source_map)."""
        try:
            if fmt == "json":
                data = json.loads(content)
            else:
                data = yaml.load(content, Loader=JsonSafeLoader)
        except json.JSONDecodeError as exc:
            raise DocumentLoadError(f"Failed to parse JSON content: {exc}") from exc
        except yaml.YAMLError as exc:
            raise DocumentLoadError(f"Failed to parse YAML content: {exc}") from exc

        return data, self.build_source_map(content)

    def load_document(self, file_path: Union[str, Path]) -> Tuple[Any, SourceMap]:
        """Load a JSON or YAML file and return (data, source_map)."""
        path = Path(file_path)

        if not path.exists():
            raise DocumentLoadError(f"Document not found: {path}")

        if not path.is_file():
            raise DocumentLoadError(f"Path is not a file: {path}")

        if self.cache_enabled and path in self._cache:
            logger.debug(f"Loading document from cache: {path}")
            return self._cache[path]

        logger.debug(f"Loading document: {path}")
        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise DocumentLoadError(f"Failed to read document {path}: {exc}") from exc

        fmt = "json" if path.suffix.lower() in JSON_SUFFIXES else "yaml"
        try:
            loaded = self.load_document_from_string(content, fmt=fmt)
        except DocumentLoadError as exc:
            raise DocumentLoadError(f"{path}: {exc}") from exc

        if self.cache_enabled:
            self._cache[path] = loaded
        return loaded

    def load(self, file_path: Union[str, Path]) -> Any:
        """Load a document without its source map."""
        return self.load_document(file_path)[0]

    def clear_cache(self) -> None:
        """Clear the document cache. Useful for testing."""
        self._cache.clear()


# Global parser instance
yaml_parser = YamlParser()
