"""Accept-all CORS layer.

Wraps Starlette's ``CORSMiddleware`` so that the accept-all policy holds for
every response, not only for requests that carry an ``Origin`` header:

    * every response gets ``Access-Control-Allow-Origin: *``
    * every ``OPTIONS`` request is answered here as a preflight with
      ``204 No Content``, the allowed methods, and the requested headers
      reflected back
"""

from __future__ import annotations

from starlette.datastructures import Headers, MutableHeaders
from starlette.responses import Response
from starlette.types import ASGIApp, Message, Receive, Scope, Send

ALLOWED_METHODS = "GET,HEAD,PUT,PATCH,POST,DELETE"


class AllowAllOriginsMiddleware:
    """Pure ASGI middleware stamping permissive CORS headers on all responses."""

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        if scope["method"] == "OPTIONS":
            await self._preflight(scope, receive, send)
            return

        async def send_with_origin(message: Message) -> None:
            if message["type"] == "http.response.start":
                headers = MutableHeaders(scope=message)
                if "access-control-allow-origin" not in headers:
                    headers["Access-Control-Allow-Origin"] = "*"
            await send(message)

        await self.app(scope, receive, send_with_origin)

    @staticmethod
    async def _preflight(scope: Scope, receive: Receive, send: Send) -> None:
        request_headers = Headers(scope=scope)
        headers = {
            "Access-Control-Allow-Origin": "*",
            "Access-Control-Allow-Methods": ALLOWED_METHODS,
            "Vary": "Access-Control-Request-Headers",
        }
        requested = request_headers.get("access-control-request-headers")
        if requested:
            headers["Access-Control-Allow-Headers"] = requested
        response = Response(status_code=204, headers=headers)
        await response(scope, receive, send)
