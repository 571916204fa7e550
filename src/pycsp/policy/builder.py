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
"""PolicyBuilder — turns a directive map into per-browser CSP response headers."""

from __future__ import annotations

from collections.abc import Mapping, Sequence

import structlog

from pycsp.browser.descriptor import BrowserDescriptor
from pycsp.browser.parser import UaParserAdapter, UserAgentParser
from pycsp.browser.rules import HeaderTokens
from pycsp.browser.rules import resolve_tokens as _resolve_tokens
from pycsp.policy.directives import format_clauses, quote_keywords, substitute_nonce, validate_directives
from pycsp.policy.options import PolicyOptions

logger = structlog.get_logger("pycsp.policy")

REPORT_ONLY_SUFFIX = "-Report-Only"


class PolicyBuilder:
    """Resolves header variants for a browser and fans one serialized policy out over them.

    The builder keeps no per-request state and can be shared across
    concurrent requests.
    """

    def __init__(self, parser: UserAgentParser | None = None) -> None:
        self._parser = parser or UaParserAdapter()

    def describe(self, user_agent: str | None) -> BrowserDescriptor | None:
        """Parse a raw ``User-Agent`` value; ``None`` when absent or unrecognised."""
        if not user_agent:
            return None
        return self._parser.parse(user_agent)

    def resolve_tokens(self, browser: BrowserDescriptor | None, options: PolicyOptions) -> HeaderTokens:
        return _resolve_tokens(browser, options)

    def serialize(self, directives: Mapping[str, Sequence[str]], options: PolicyOptions) -> str:
        """Validate names, substitute the nonce, join clauses and quote keywords.

        Names are checked before the nonce so an unknown directive is always
        the error reported.
        """
        validate_directives(directives)
        return quote_keywords(format_clauses(substitute_nonce(directives, options.nonce)))

    def build(
        self,
        browser: BrowserDescriptor | None,
        directives: Mapping[str, Sequence[str]],
        options: PolicyOptions | None = None,
    ) -> dict[str, str]:
        """Return ``{header name: policy}`` for ``browser``.

        Empty when the browser supports no CSP header or the policy is empty.
        Every returned header carries the same policy string.
        """
        options = options or PolicyOptions()
        tokens = self.resolve_tokens(browser, options)
        if not tokens:
            return {}

        policy = self.serialize(directives, options)
        if not policy.strip():
            logger.debug("csp_policy_empty")
            return {}

        suffix = REPORT_ONLY_SUFFIX if options.report_only else ""
        headers = {f"{token.header_name}{suffix}": policy for token in tokens}
        logger.debug(
            "csp_headers_built",
            browser=browser.name if browser else None,
            headers=list(headers),
        )
        return headers

    def build_for_user_agent(
        self,
        user_agent: str | None,
        directives: Mapping[str, Sequence[str]],
        options: PolicyOptions | None = None,
    ) -> dict[str, str]:
        return self.build(self.describe(user_agent), directives, options)
