# Copyright 2026 Firefly Software Solutions Inc.
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
"""StructlogAdapter: LoggingPort that renders flycors events through structlog."""

from __future__ import annotations

import logging
import sys
from typing import IO, Any

import structlog

from flycors.config.properties.logging import LoggingProperties
from flycors.core.config import Config


class StructlogAdapter:
    """Routes the ``flycors`` logger tree through structlog.

    Only that tree is touched. It gets its own stream handler and stops
    propagating, so the host application's root logging is left alone.
    ``flycors.logging.level.root`` sets the level of the whole tree and the
    other ``flycors.logging.level`` entries set single loggers.
    """

    def __init__(self, namespace: str = "flycors", stream: IO[str] | None = None) -> None:
        self.namespace = namespace
        self.properties = LoggingProperties()
        self._stream = stream
        self._handler: logging.Handler | None = None

    def configure(self, config: Config) -> None:
        self.properties = config.bind(LoggingProperties)
        levels = dict(self.properties.level)
        tree_level = levels.pop("root", "INFO")

        structlog.configure(
            processors=self._processors(self.properties.format.lower()),
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=False,
        )
        self._install_handler()

        self.set_level(self.namespace, tree_level)
        for name, level in levels.items():
            self.set_level(name, level)

    def get_logger(self, name: str) -> Any:
        return structlog.get_logger(name)

    def set_level(self, name: str, level: str) -> None:
        """Set a stdlib logger level; unknown level names fall back to INFO."""
        log_level = getattr(logging, str(level).upper(), logging.INFO)
        logging.getLogger(name).setLevel(log_level)

    @staticmethod
    def _processors(fmt: str) -> list[structlog.types.Processor]:
        processors: list[structlog.types.Processor] = [
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
        ]
        if fmt == "json":
            processors.append(structlog.processors.format_exc_info)
            processors.append(structlog.processors.JSONRenderer())
        else:
            processors.append(structlog.dev.ConsoleRenderer(colors=False))
        return processors

    def _install_handler(self) -> None:
        tree = logging.getLogger(self.namespace)
        if self._handler is not None:
            tree.removeHandler(self._handler)
        self._handler = logging.StreamHandler(self._stream or sys.stdout)
        self._handler.setFormatter(logging.Formatter("%(message)s"))
        tree.addHandler(self._handler)
        tree.propagate = False
