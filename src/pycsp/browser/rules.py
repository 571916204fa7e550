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
"""Per-browser rules deciding which CSP header names a client understands.

Each rule is a pure function of the browser descriptor and the policy
options. Thresholds are inclusive lower bounds on the integer major
version; a version with no leading integer resolves to no headers.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from enum import Enum
from types import MappingProxyType
from typing import TYPE_CHECKING

import structlog

from pycsp.browser.descriptor import BrowserDescriptor, major_version, version_tuple

if TYPE_CHECKING:
    from pycsp.policy.options import PolicyOptions

logger = structlog.get_logger("pycsp.browser")


class HeaderToken(Enum):
    """A CSP header variant, valued by its literal header name."""

    STANDARD = "Content-Security-Policy"
    LEGACY_X = "X-Content-Security-Policy"
    LEGACY_WEBKIT = "X-WebKit-CSP"

    @property
    def header_name(self) -> str:
        return self.value


HeaderTokens = tuple[HeaderToken, ...]
BrowserRule = Callable[[BrowserDescriptor, "PolicyOptions"], HeaderTokens]

NONE: HeaderTokens = ()
STANDARD: HeaderTokens = (HeaderToken.STANDARD,)
LEGACY_X: HeaderTokens = (HeaderToken.LEGACY_X,)
LEGACY_WEBKIT: HeaderTokens = (HeaderToken.LEGACY_WEBKIT,)
ALL_TOKENS: HeaderTokens = tuple(HeaderToken)

_ANDROID_MIN_OS = (4, 4)


def all_tokens() -> HeaderTokens:
    """Every known header variant, in emission order."""
    return ALL_TOKENS


def _by_major(
    browser: BrowserDescriptor,
    standard_from: int,
    legacy_from: int | None = None,
    legacy: HeaderTokens = NONE,
) -> HeaderTokens:
    major = major_version(browser.version)
    if major is None:
        return NONE
    if major >= standard_from:
        return STANDARD
    if legacy_from is not None and major >= legacy_from:
        return legacy
    return NONE


def ie(browser: BrowserDescriptor, options: PolicyOptions) -> HeaderTokens:
    return _by_major(browser, 12, 10, LEGACY_X)


def chrome(browser: BrowserDescriptor, options: PolicyOptions) -> HeaderTokens:
    return _by_major(browser, 25, 14, LEGACY_WEBKIT)


def safari(browser: BrowserDescriptor, options: PolicyOptions) -> HeaderTokens:
    return _by_major(browser, 9, 6, LEGACY_WEBKIT)


def opera(browser: BrowserDescriptor, options: PolicyOptions) -> HeaderTokens:
    return _by_major(browser, 15)


def firefox(browser: BrowserDescriptor, options: PolicyOptions) -> HeaderTokens:
    return _by_major(browser, 23, 4, LEGACY_X)


def android_browser(browser: BrowserDescriptor, options: PolicyOptions) -> HeaderTokens:
    """The stock Android browser supports CSP from Android 4.4 (KitKat)."""
    if options.disable_android or browser.os is None:
        return NONE
    if version_tuple(browser.os.version) >= _ANDROID_MIN_OS:
        return STANDARD
    return NONE


def chrome_mobile(browser: BrowserDescriptor, options: PolicyOptions) -> HeaderTokens:
    """Only Chrome on iOS is known to honour CSP; other platforms get nothing."""
    if browser.os is not None and browser.os.family == "iOS":
        return STANDARD
    return NONE


RULES: Mapping[str, BrowserRule] = MappingProxyType(
    {
        "IE": ie,
        "Chrome": chrome,
        "Safari": safari,
        "Opera": opera,
        "Firefox": firefox,
        "Android Browser": android_browser,
        "Chrome Mobile": chrome_mobile,
    }
)


def resolve_tokens(browser: BrowserDescriptor | None, options: PolicyOptions) -> HeaderTokens:
    """Return the header variants to emit for ``browser``.

    Unknown or missing browsers, and ``set_all_headers``, get every variant:
    a browser ignores CSP headers it does not understand.
    """
    if options.set_all_headers or browser is None:
        return ALL_TOKENS

    rule = RULES.get(browser.name or "")
    if rule is None:
        logger.debug("csp_browser_unknown", browser=browser.name, version=browser.version)
        return ALL_TOKENS

    tokens = rule(browser, options)
    if not tokens:
        logger.debug("csp_browser_unsupported", browser=browser.name, version=browser.version)
    return tokens
