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
"""Policy options and their configuration binding."""

from __future__ import annotations

from dataclasses import dataclass, field

from pycsp.core.config import config_properties

DirectiveMap = dict[str, list[str]]


@dataclass(frozen=True)
class PolicyOptions:
    """Per-build options.

    Attributes:
        set_all_headers: Emit every header variant regardless of the browser.
        report_only: Suffix every header name with ``-Report-Only``.
        disable_android: Never send CSP to the stock Android browser.
        nonce: Value substituted for ``@nonce`` source tokens.
    """

    set_all_headers: bool = False
    report_only: bool = False
    disable_android: bool = False
    nonce: str | None = None


@config_properties(prefix="pycsp.csp")
@dataclass
class CspProperties:
    """CSP settings bound from the ``pycsp.csp`` configuration section."""

    directives: DirectiveMap = field(default_factory=dict)
    set_all_headers: bool = False
    report_only: bool = False
    disable_android: bool = False
    nonce: str | None = None
    generate_nonce: bool = False

    def to_options(self, nonce: str | None = None) -> PolicyOptions:
        """Build options, preferring an explicit per-request ``nonce``."""
        return PolicyOptions(
            set_all_headers=self.set_all_headers,
            report_only=self.report_only,
            disable_android=self.disable_android,
            nonce=nonce if nonce is not None else self.nonce,
        )
