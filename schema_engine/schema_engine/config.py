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

"""Configuration management for the schema engine."""

import os
import logging
from dataclasses import dataclass

from .utils.logging_utils import DEFAULT_FORMAT, configure_split_stream_logging


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes", "on")


@dataclass
class EngineConfig:
    """Configuration class for validation and document loading."""
    max_depth: int = 150
    format_assertion: bool = True
    log_level: str = "INFO"
    print_level: str = "WARNING"
    cache_enabled: bool = False

    @classmethod
    def from_env(cls) -> 'EngineConfig':
        """Create configuration from environment variables."""
        return cls(
            max_depth=int(os.getenv('SCHEMA_ENGINE_MAX_DEPTH', '150')),
            format_assertion=_env_flag('SCHEMA_ENGINE_FORMAT_ASSERTION', 'true'),
            log_level=os.getenv('SCHEMA_ENGINE_LOG_LEVEL', 'INFO'),
            print_level=os.getenv('SCHEMA_ENGINE_PRINT_LEVEL', 'WARNING'),
            cache_enabled=_env_flag('SCHEMA_ENGINE_CACHE_ENABLED', 'false'),
        )

    def set_logging(self, quiet_stdout: bool = False) -> logging.Logger:
        """Setup logging based on configuration."""
        level = getattr(logging, self.log_level.upper(), logging.INFO)
        stderr_level = getattr(logging, self.print_level.upper(), logging.WARNING)

        formatter = logging.Formatter(DEFAULT_FORMAT)
        configure_split_stream_logging(
            level=level,
            stderr_level=stderr_level,
            formatter=formatter,
            quiet_stdout=quiet_stdout,
        )

        return logging.getLogger('schema_engine')


# Global configuration instance
engine_config = EngineConfig.from_env()
