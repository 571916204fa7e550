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
"""Tests for browser descriptors and version parsing."""

from dataclasses import FrozenInstanceError

import pytest

from pycsp.browser.descriptor import BrowserDescriptor, OperatingSystem, major_version, version_tuple


class TestMajorVersion:
    @pytest.mark.parametrize(
        ("version", "expected"),
        [("27.0.1453.93", 27), ("9", 9), ("11b2", 11), (" 4.4", 4), ("", None), ("beta", None), (None, None)],
    )
    def test_leading_integer(self, version, expected):
        assert major_version(version) == expected


class TestVersionTuple:
    def test_dotted(self):
        assert version_tuple("4.4") == (4, 4)

    def test_stops_at_suffix(self):
        assert version_tuple("4.4.2-r1.7") == (4, 4, 2)

    def test_non_numeric(self):
        assert version_tuple("x.1") == ()

    def test_compares_numerically(self):
        assert version_tuple("4.10") > version_tuple("4.4")


class TestBrowserDescriptor:
    def test_defaults(self):
        browser = BrowserDescriptor()
        assert browser.name is None
        assert browser.version == ""
        assert browser.os is None

    def test_frozen(self):
        browser = BrowserDescriptor(name="Chrome", version="45", os=OperatingSystem("Windows", "10"))
        with pytest.raises(FrozenInstanceError):
            browser.version = "46"  # type: ignore[misc]
