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
"""Minimal Starlette app serving browser-specific CSP headers.

Run with ``uvicorn examples.starlette_app:app`` from the repository root.
"""

from __future__ import annotations

from pathlib import Path

from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.requests import Request
from starlette.responses import HTMLResponse
from starlette.routing import Route

from pycsp.core.config import Config
from pycsp.logging.structlog_adapter import StructlogAdapter
from pycsp.policy.options import CspProperties
from pycsp.web.middleware import CspMiddleware

config = Config.from_file(Path(__file__).parent / "pycsp.yaml")
StructlogAdapter().configure(config)


async def index(request: Request) -> HTMLResponse:
    nonce = request.state.csp_nonce
    return HTMLResponse(
        "<!doctype html><html><body>"
        f'<script nonce="{nonce}">document.body.append("inline script allowed")</script>'
        "<script>document.body.append(' blocked')</script>"
        "</body></html>"
    )


app = Starlette(
    routes=[Route("/", index)],
    middleware=[Middleware(CspMiddleware, properties=config.bind(CspProperties))],
)
