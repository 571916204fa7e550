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
"""Directive allow-list and policy string serialization.

A directive map serializes to ``"<name> <src> <src>; <name> <src>; "``,
every clause terminated by ``"; "``. Source tokens pass through untouched
apart from ``@nonce`` substitution and quoting of the CSP keywords.
"""

from __future__ import annotations

import secrets
from collections.abc import Mapping, Sequence

import structlog

from pycsp.kernel.exceptions import ValidationException

logger = structlog.get_logger("pycsp.policy")

ALLOWED_DIRECTIVES: frozenset[str] = frozenset(
    {
        "base-uri",
        "child-src",
        "connect-src",
        "default-src",
        "font-src",
        "form-action",
        "frame-ancestors",
        "frame-src",
        "img-src",
        "media-src",
        "object-src",
        "plugin-types",
        "report-uri",
        "style-src",
        "script-src",
        "upgrade-insecure-requests",
    }
)

KEYWORDS: frozenset[str] = frozenset({"none", "self", "unsafe-inline", "unsafe-eval"})

NONCE_PLACEHOLDER = "@nonce"

_CLAUSE_SEPARATOR = "; "


def validate_directives(directives: Mapping[str, Sequence[str]]) -> None:
    """Raise ValidationException for the first directive outside the allow-list."""
    for name in directives:
        if name not in ALLOWED_DIRECTIVES:
            logger.warning("csp_invalid_directive", directive=name)
            raise ValidationException(
                f"invalid directive: {name}",
                code="INVALID_DIRECTIVE",
                context={"directive": name},
            )


def format_clauses(directives: Mapping[str, Sequence[str]]) -> str:
    """Join each directive and its sources, in map order, without checking names."""
    return "".join(f"{name} {' '.join(sources)}{_CLAUSE_SEPARATOR}" for name, sources in directives.items())


def serialize_directives(directives: Mapping[str, Sequence[str]]) -> str:
    """Validate directive names, then join them and their sources into one policy string."""
    validate_directives(directives)
    return format_clauses(directives)


def quote_keywords(policy: str) -> str:
    """Wrap bare ``none``, ``self``, ``unsafe-inline`` and ``unsafe-eval`` in single quotes.

    Only whole space-delimited tokens are quoted; a trailing ``;`` stays
    outside the quotes. Already-quoted keywords and longer tokens that merely
    contain a keyword (``self.example.com``) are left alone, so quoting twice
    changes nothing.
    """

    def _quote(token: str) -> str:
        bare, semi = (token[:-1], ";") if token.endswith(";") else (token, "")
        if bare in KEYWORDS:
            return f"'{bare}'{semi}"
        return token

    return " ".join(_quote(token) for token in policy.split(" "))


def substitute_nonce(
    directives: Mapping[str, Sequence[str]],
    nonce: str | None,
) -> dict[str, list[str]]:
    """Replace every ``@nonce`` source with ``'nonce-<nonce>'``.

    ``@nonce`` without a configured nonce is a configuration error and
    raises ValidationException; maps that never use ``@nonce`` are returned
    unchanged whether or not a nonce is set.
    """
    substituted: dict[str, list[str]] = {}
    for name, sources in directives.items():
        if NONCE_PLACEHOLDER in sources and not nonce:
            raise ValidationException(
                f"nonce required: '{NONCE_PLACEHOLDER}' used in {name} but no nonce configured",
                code="NONCE_REQUIRED",
                context={"directive": name},
            )
        substituted[name] = [f"'nonce-{nonce}'" if src == NONCE_PLACEHOLDER else src for src in sources]
    return substituted


def uses_nonce(directives: Mapping[str, Sequence[str]]) -> bool:
    return any(NONCE_PLACEHOLDER in sources for sources in directives.values())


def generate_nonce(nbytes: int = 16) -> str:
    """Generate a URL-safe random nonce for a single response."""
    return secrets.token_urlsafe(nbytes)
