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
"""structlog setup for the ``pycsp.*`` loggers."""

from __future__ import annotations

import logging
import sys
from collections.abc import MutableMapping
from typing import Any

import structlog

from pycsp.core.config import Config

LIBRARY_LOGGERS = ("pycsp.browser", "pycsp.policy", "pycsp.web")

EVENT_PREFIX = "csp_"


def tag_csp_event(logger: Any, method_name: str, event_dict: MutableMapping[str, Any]) -> MutableMapping[str, Any]:
    """Add ``component`` (``browser``, ``policy``, ...) to ``csp_*`` events."""
    if str(event_dict.get("event", "")).startswith(EVENT_PREFIX):
        event_dict.setdefault("component", str(event_dict.get("logger", "")).rpartition(".")[2])
    return event_dict


class StructlogAdapter:
    """Routes pycsp's structlog events through stdlib logging.

    Config keys:
        pycsp.logging.level.root: level of the root logger (default WARNING)
        pycsp.logging.level.pycsp: level for every library logger
        pycsp.logging.level.<logger>: level for one logger, e.g. ``pycsp.browser``
        pycsp.logging.format: ``console`` or ``json``

    Library loggers default to the root level, so the per-request
    ``csp_*`` debug events stay silent unless asked for.
    """

    def __init__(self) -> None:
        self.root_level = "WARNING"
        self.format = "console"
        self.logger_levels: dict[str, str] = {}

    def configure(self, config: Config) -> None:
        levels = dict(config.get_section("pycsp.logging.level"))
        self.root_level = str(levels.pop("root", self.root_level)).upper()
        self.logger_levels = {name: str(level).upper() for name, level in levels.items()}
        self.format = str(config.get("pycsp.logging.format", self.format)).lower()

        structlog.configure(
            processors=self._processors(),
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )
        logging.basicConfig(
            format="%(message)s",
            stream=sys.stdout,
            level=getattr(logging, self.root_level, logging.WARNING),
            force=True,
        )

        library_level = self.logger_levels.pop("pycsp", self.root_level)
        for name in LIBRARY_LOGGERS:
            self.set_level(name, self.logger_levels.get(name, library_level))
        for name, level in self.logger_levels.items():
            if name not in LIBRARY_LOGGERS:
                self.set_level(name, level)

    def get_logger(self, name: str) -> Any:
        return structlog.get_logger(name)

    def set_level(self, name: str, level: str) -> None:
        logging.getLogger(name).setLevel(getattr(logging, level.upper(), logging.WARNING))

    def _processors(self) -> list[Any]:
        renderer = structlog.processors.JSONRenderer() if self.format == "json" else structlog.dev.ConsoleRenderer()
        return [
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            tag_csp_event,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ]
