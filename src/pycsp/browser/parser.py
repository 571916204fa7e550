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
"""User-agent parsing port and its ua-parser adapter."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

import ua_parser

from pycsp.browser.descriptor import BrowserDescriptor, OperatingSystem

# ua-parser family -> rule table name
_FAMILY_ALIASES: dict[str, str] = {
    "Chrome Mobile iOS": "Chrome Mobile",
    "Android": "Android Browser",
    "Mobile Safari": "Safari",
    "Mobile Safari UI/WKWebView": "Safari",
    "Firefox Mobile": "Firefox",
    "Opera Mobile": "Opera",
}

_UNMATCHED_FAMILY = "Other"


@runtime_checkable
class UserAgentParser(Protocol):
    """Turns a raw ``User-Agent`` header into a :class:`BrowserDescriptor`.

    Returns ``None`` when the string is empty or cannot be recognised.
    """

    def parse(self, user_agent: str) -> BrowserDescriptor | None: ...


def _dotted(component: Any) -> str:
    parts = [component.major, component.minor, component.patch]
    return ".".join(p for p in parts if p)


class UaParserAdapter:
    """UserAgentParser backed by the ``ua-parser`` library (uap-core regexes)."""

    def parse(self, user_agent: str) -> BrowserDescriptor | None:
        if not user_agent:
            return None

        result = ua_parser.parse(user_agent)
        agent = result.user_agent
        if agent is None or agent.family == _UNMATCHED_FAMILY:
            return None

        os_info = None
        if result.os is not None and result.os.family != _UNMATCHED_FAMILY:
            os_info = OperatingSystem(family=result.os.family, version=_dotted(result.os))

        return BrowserDescriptor(
            name=_FAMILY_ALIASES.get(agent.family, agent.family),
            version=_dotted(agent),
            os=os_info,
        )
