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
"""Tests for PolicyBuilder."""

import pytest

from pycsp.browser.descriptor import BrowserDescriptor, OperatingSystem
from pycsp.kernel.exceptions import ValidationException
from pycsp.policy import builder as builder_module
from pycsp.policy.builder import PolicyBuilder
from pycsp.policy.options import PolicyOptions

CHROME = BrowserDescriptor(name="Chrome", version="27.0.1453.93", os=OperatingSystem("Windows", "7"))
OLD_OPERA = BrowserDescriptor(name="Opera", version="11.52")
UNKNOWN = BrowserDescriptor(name="G-Bot", version="27.0.1453.93")

DIRECTIVES = {"default-src": ["self", "js.example.com"]}
POLICY = "default-src 'self' js.example.com; "


class _StubParser:
    def __init__(self, result: BrowserDescriptor | None) -> None:
        self.result = result
        self.calls: list[str] = []

    def parse(self, user_agent: str) -> BrowserDescriptor | None:
        self.calls.append(user_agent)
        return self.result


@pytest.fixture
def builder() -> PolicyBuilder:
    return PolicyBuilder(parser=_StubParser(None))


class TestBuild:
    def test_latest_chrome_gets_standard_header(self, builder: PolicyBuilder):
        assert builder.build(CHROME, DIRECTIVES) == {"Content-Security-Policy": POLICY}

    def test_unsupported_browser_gets_nothing(self, builder: PolicyBuilder):
        assert builder.build(OLD_OPERA, DIRECTIVES) == {}

    def test_unsupported_browser_skips_validation(self, builder: PolicyBuilder):
        assert builder.build(OLD_OPERA, {"foo-bar": ["self"]}) == {}

    def test_unknown_browser_gets_all_headers(self, builder: PolicyBuilder):
        assert builder.build(UNKNOWN, DIRECTIVES) == {
            "Content-Security-Policy": POLICY,
            "X-Content-Security-Policy": POLICY,
            "X-WebKit-CSP": POLICY,
        }

    def test_missing_browser_gets_all_headers(self, builder: PolicyBuilder):
        assert set(builder.build(None, DIRECTIVES)) == {
            "Content-Security-Policy",
            "X-Content-Security-Policy",
            "X-WebKit-CSP",
        }

    def test_report_only(self, builder: PolicyBuilder):
        headers = builder.build(CHROME, DIRECTIVES, PolicyOptions(report_only=True))
        assert headers == {"Content-Security-Policy-Report-Only": POLICY}

    def test_report_only_all_headers(self, builder: PolicyBuilder):
        headers = builder.build(CHROME, DIRECTIVES, PolicyOptions(report_only=True, set_all_headers=True))
        assert list(headers) == [
            "Content-Security-Policy-Report-Only",
            "X-Content-Security-Policy-Report-Only",
            "X-WebKit-CSP-Report-Only",
        ]

    @pytest.mark.parametrize("browser", [CHROME, UNKNOWN, None])
    def test_empty_directives_give_no_headers(self, builder: PolicyBuilder, browser):
        assert builder.build(browser, {}) == {}

    def test_invalid_directive_aborts_build(self, builder: PolicyBuilder):
        with pytest.raises(ValidationException, match="invalid directive: foo-bar"):
            builder.build(CHROME, {"default-src": ["self"], "foo-bar": ["self"]})

    def test_nonce_substituted(self, builder: PolicyBuilder):
        headers = builder.build(CHROME, {"script-src": ["self", "@nonce"]}, PolicyOptions(nonce="614d9122"))
        assert headers == {"Content-Security-Policy": "script-src 'self' 'nonce-614d9122'; "}

    def test_invalid_directive_reported_before_missing_nonce(self, builder: PolicyBuilder):
        with pytest.raises(ValidationException, match="invalid directive: bogus"):
            builder.build(CHROME, {"script-src": ["@nonce"], "bogus": []})

    def test_directive_names_checked_once_per_build(self, builder: PolicyBuilder, monkeypatch: pytest.MonkeyPatch):
        calls: list[list[str]] = []
        original = builder_module.validate_directives

        def counting(directives):
            calls.append(list(directives))
            original(directives)

        monkeypatch.setattr(builder_module, "validate_directives", counting)
        builder.build(CHROME, DIRECTIVES)
        assert calls == [["default-src"]]

    def test_missing_nonce(self, builder: PolicyBuilder):
        with pytest.raises(ValidationException, match="nonce required"):
            builder.build(CHROME, {"script-src": ["@nonce"]})


class TestUserAgent:
    def test_build_for_user_agent_uses_parser(self):
        parser = _StubParser(CHROME)
        headers = PolicyBuilder(parser=parser).build_for_user_agent("Chrome/27", DIRECTIVES)
        assert parser.calls == ["Chrome/27"]
        assert headers == {"Content-Security-Policy": POLICY}

    def test_missing_user_agent_skips_parser(self):
        parser = _StubParser(CHROME)
        headers = PolicyBuilder(parser=parser).build_for_user_agent(None, DIRECTIVES)
        assert parser.calls == []
        assert len(headers) == 3

    def test_unparsed_user_agent_gets_all_headers(self):
        headers = PolicyBuilder(parser=_StubParser(None)).build_for_user_agent("???", DIRECTIVES)
        assert len(headers) == 3
