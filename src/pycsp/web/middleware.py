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
"""Content-Security-Policy middleware for Starlette — pure ASGI."""

from __future__ import annotations

from typing import Any

from starlette.datastructures import Headers, MutableHeaders
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp, Receive, Scope, Send

from pycsp.policy.builder import PolicyBuilder
from pycsp.policy.directives import generate_nonce, substitute_nonce, uses_nonce, validate_directives
from pycsp.policy.options import CspProperties, DirectiveMap, PolicyOptions

NONCE_STATE_KEY = "csp_nonce"


def apply(
    request: Request,
    response: Response,
    directives: DirectiveMap,
    options: PolicyOptions | None = None,
    builder: PolicyBuilder | None = None,
) -> None:
    """Set the CSP headers suited to the request's browser on ``response``."""
    builder = builder or PolicyBuilder()
    csp_headers = builder.build_for_user_agent(request.headers.get("user-agent"), directives, options)
    for name, value in csp_headers.items():
        response.headers[name] = value


class CspMiddleware:
    """Adds browser-specific CSP headers to every HTTP response.

    With ``generate_nonce`` set, no static nonce configured and ``@nonce``
    in the policy, a fresh nonce is generated per request and exposed as
    ``request.state.csp_nonce`` for templates. The directive map is
    validated here so a bad policy fails at startup rather than on the
    first request.
    """

    def __init__(
        self,
        app: ASGIApp,
        properties: CspProperties | None = None,
        builder: PolicyBuilder | None = None,
    ) -> None:
        self.app = app
        self._properties = properties or CspProperties()
        self._builder = builder or PolicyBuilder()
        self._directives: DirectiveMap = {k: list(v) for k, v in self._properties.directives.items()}
        self._nonce_in_policy = uses_nonce(self._directives)

        validate_directives(self._directives)
        if not self._properties.generate_nonce:
            substitute_nonce(self._directives, self._properties.nonce)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        props = self._properties
        nonce = props.nonce
        if nonce is None and props.generate_nonce and self._nonce_in_policy:
            nonce = generate_nonce()
        if nonce is not None:
            scope.setdefault("state", {})[NONCE_STATE_KEY] = nonce

        user_agent = Headers(scope=scope).get("user-agent")
        csp_headers = self._builder.build_for_user_agent(user_agent, self._directives, props.to_options(nonce))

        async def send_with_csp(message: Any) -> None:
            if message["type"] == "http.response.start" and csp_headers:
                headers = MutableHeaders(scope=message)
                for name, value in csp_headers.items():
                    headers[name] = value
            await send(message)

        await self.app(scope, receive, send_with_csp)
