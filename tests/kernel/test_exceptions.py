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
"""Tests for the pycsp exception hierarchy."""

from pycsp.kernel.exceptions import ConfigurationException, PyCspException, ValidationException


class TestPyCspException:
    def test_basic_creation(self):
        exc = PyCspException("something went wrong")
        assert str(exc) == "something went wrong"
        assert exc.code is None
        assert exc.context == {}

    def test_with_code_and_context(self):
        exc = PyCspException("invalid directive: foo", code="INVALID_DIRECTIVE", context={"directive": "foo"})
        assert exc.code == "INVALID_DIRECTIVE"
        assert exc.context["directive"] == "foo"

    def test_context_not_shared_between_instances(self):
        exc = PyCspException("test")
        exc.context["key"] = "value"
        assert PyCspException("test2").context == {}


class TestExceptionHierarchy:
    def test_validation_is_pycsp(self):
        assert issubclass(ValidationException, PyCspException)

    def test_configuration_is_pycsp(self):
        assert issubclass(ConfigurationException, PyCspException)

    def test_catch_by_base(self):
        try:
            raise ValidationException("invalid directive: foo-bar")
        except PyCspException as exc:
            assert str(exc) == "invalid directive: foo-bar"
