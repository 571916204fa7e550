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
"""Browser identity derived from a user-agent string."""

from __future__ import annotations

import re
from dataclasses import dataclass

_LEADING_INT_RE = re.compile(r"^\s*(\d+)")


@dataclass(frozen=True)
class OperatingSystem:
    family: str = ""
    version: str = ""


@dataclass(frozen=True)
class BrowserDescriptor:
    """Browser name, version and OS of the requesting client.

    ``name`` uses the rule-table vocabulary ("Chrome", "IE", "Chrome Mobile",
    "Android Browser", ...). Any other name is treated as unknown.
    """

    name: str | None = None
    version: str = ""
    os: OperatingSystem | None = None


def major_version(version: str | None) -> int | None:
    """Return the leading integer of a dotted version, or ``None`` if there is none.

    >>> major_version("27.0.1453.93")
    27
    >>> major_version("beta") is None
    True
    """
    if not version:
        return None
    match = _LEADING_INT_RE.match(version)
    return int(match.group(1)) if match else None


def version_tuple(version: str | None) -> tuple[int, ...]:
    """Parse the leading numeric components of a dotted version.

    Parsing stops at the first component that does not start with a digit,
    so ``"4.4.2-r1"`` gives ``(4, 4, 2)`` and ``"x.1"`` gives ``()``.
    """
    parts: list[int] = []
    for piece in (version or "").split("."):
        match = _LEADING_INT_RE.match(piece)
        if match is None:
            break
        parts.append(int(match.group(1)))
        if match.end() != len(piece):
            break
    return tuple(parts)
