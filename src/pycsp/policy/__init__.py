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
"""pycsp policy — directive serialization and header building."""

from pycsp.policy.builder import REPORT_ONLY_SUFFIX, PolicyBuilder
from pycsp.policy.directives import (
    ALLOWED_DIRECTIVES,
    KEYWORDS,
    NONCE_PLACEHOLDER,
    format_clauses,
    generate_nonce,
    quote_keywords,
    serialize_directives,
    substitute_nonce,
    uses_nonce,
    validate_directives,
)
from pycsp.policy.options import CspProperties, DirectiveMap, PolicyOptions

__all__ = [
    "ALLOWED_DIRECTIVES",
    "KEYWORDS",
    "NONCE_PLACEHOLDER",
    "format_clauses",
    "REPORT_ONLY_SUFFIX",
    "CspProperties",
    "DirectiveMap",
    "PolicyBuilder",
    "PolicyOptions",
    "generate_nonce",
    "quote_keywords",
    "serialize_directives",
    "substitute_nonce",
    "uses_nonce",
    "validate_directives",
]
