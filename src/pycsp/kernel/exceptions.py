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
"""Unified exception hierarchy for pycsp.

All library exceptions inherit from PyCspException so callers can catch a
single base type, or a specific subclass for targeted handling.

Categories:
- ValidationException: a policy that cannot be serialized (unknown
  directive, ``@nonce`` with no nonce configured)
- ConfigurationException: configuration that cannot be loaded or bound
"""

from __future__ import annotations


class PyCspException(Exception):
    """Base exception for all pycsp errors.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "INVALID_DIRECTIVE").
        context: Arbitrary key-value pairs for error context and debugging.
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.context: dict = context if context is not None else {}


class ValidationException(PyCspException):
    """A policy failed validation and no header may be emitted."""


class ConfigurationException(PyCspException):
    """Configuration could not be loaded, resolved or bound."""
