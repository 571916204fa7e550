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
"""CSP settings from a YAML/TOML file, with ``PYCSP_*`` environment overrides."""

from __future__ import annotations

import dataclasses
import os
import tomllib
from collections.abc import Callable
from pathlib import Path
from typing import Any, TypeVar, get_type_hints

import yaml  # type: ignore[import-untyped]

from pycsp.kernel.exceptions import ConfigurationException

T = TypeVar("T")

_CONFIG_PROPERTIES_ATTR = "__pycsp_config_prefix__"

_ENV_PREFIX = "PYCSP_"

_MISSING = object()


def config_properties(prefix: str) -> Callable[[type[T]], type[T]]:
    """Mark a dataclass as bindable to a configuration prefix.

    Usage:
        @config_properties(prefix="pycsp.csp")
        @dataclass
        class CspProperties:
            report_only: bool = False
    """

    def decorator(cls: type[T]) -> type[T]:
        setattr(cls, _CONFIG_PROPERTIES_ATTR, prefix)
        return cls

    return decorator


def _env_key(key: str) -> str:
    # pycsp.csp.report_only -> PYCSP_CSP_REPORT_ONLY
    return _ENV_PREFIX + key.removeprefix("pycsp.").upper().replace(".", "_").replace("-", "_")


def _coerce(value: Any, expected_type: Any) -> Any:
    if not isinstance(value, str):
        return value
    if expected_type is bool:
        return value.lower() in ("true", "1", "yes")
    if expected_type is int:
        return int(value)
    if expected_type is float:
        return float(value)
    return value


class Config:
    """Nested configuration read with dot-notation keys.

    An environment variable named after the key (``PYCSP_CSP_NONCE`` for
    ``pycsp.csp.nonce``) wins over the file value.
    """

    def __init__(self, data: dict[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = data or {}

    @classmethod
    def from_file(cls, path: str | Path) -> Config:
        """Load a ``.yaml``/``.yml`` or ``.toml`` file; a missing file yields an empty config."""
        path = Path(path)
        if not path.is_file():
            return cls()
        if path.suffix == ".toml":
            return cls(tomllib.loads(path.read_text()))
        return cls(yaml.safe_load(path.read_text()) or {})

    def to_dict(self) -> dict[str, Any]:
        return dict(self._data)

    def _lookup(self, key: str) -> Any:
        node: Any = self._data
        for part in key.split("."):
            if not isinstance(node, dict) or part not in node:
                return _MISSING
            node = node[part]
        return node

    def get(self, key: str, default: Any = None) -> Any:
        env_val = os.environ.get(_env_key(key))
        if env_val is not None:
            return env_val
        value = self._lookup(key)
        return default if value is _MISSING or value is None else value

    def get_section(self, prefix: str) -> dict[str, Any]:
        section = self._lookup(prefix)
        return section if isinstance(section, dict) else {}

    def bind(self, config_cls: type[T]) -> T:
        """Build a @config_properties dataclass from its section.

        Keys that are absent or set to null keep the field default.
        """
        prefix = getattr(config_cls, _CONFIG_PROPERTIES_ATTR, None)
        if prefix is None:
            raise ConfigurationException(
                f"{config_cls.__name__} is not decorated with @config_properties",
                code="NOT_BINDABLE",
                context={"class": config_cls.__name__},
            )

        hints = get_type_hints(config_cls)
        kwargs: dict[str, Any] = {}
        for field in dataclasses.fields(config_cls):  # type: ignore[arg-type]
            value = self.get(f"{prefix}.{field.name}")
            if value is not None:
                kwargs[field.name] = _coerce(value, hints.get(field.name))
        return config_cls(**kwargs)
