"""JSON body-parsing middleware.

Runs before routing, so every request whose ``Content-Type`` is
``application/json`` has its body parsed up front, whatever path it targets.
Other types, ``application/*+json`` included, pass through unparsed.  The
decoded value is stored at ``request.state.json`` and the raw body is
replayed to the wrapped app, so handlers may still declare body parameters or
call ``await request.json()``.

Rejections use FastAPI's ``{"detail": ...}`` error shape:

    400  malformed JSON, or a top-level value that is not an object/array
    413  body larger than the configured limit
    415  a charset other than UTF-8

An empty body is treated as "no body" and passed through untouched.
"""

from __future__ import annotations

import json
from typing import Any

from starlette.datastructures import Headers
from starlette.responses import JSONResponse
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from backend.config import DEFAULT_JSON_BODY_LIMIT, is_ascii_digits

_WHITESPACE = b" \t\n\r"


def parse_content_type(value: str | None) -> tuple[str, dict[str, str]]:
    """Split a ``Content-Type`` header into its media type and parameters."""
    if not value:
        return "", {}
    media_type, *raw_params = value.split(";")
    params: dict[str, str] = {}
    for raw in raw_params:
        key, sep, val = raw.partition("=")
        if sep:
            params[key.strip().lower()] = val.strip().strip('"')
    return media_type.strip().lower(), params


def is_json_media_type(media_type: str) -> bool:
    return media_type == "application/json"


class JSONBodyMiddleware:
    """Pure ASGI middleware that parses JSON request bodies before dispatch."""

    def __init__(self, app: ASGIApp, limit: int = DEFAULT_JSON_BODY_LIMIT) -> None:
        self.app = app
        self.limit = limit

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        headers = Headers(scope=scope)
        media_type, params = parse_content_type(headers.get("content-type"))
        if not is_json_media_type(media_type):
            await self.app(scope, receive, send)
            return

        charset = params.get("charset", "utf-8").lower()
        if charset not in ("utf-8", "utf8"):
            await self._reject(415, f"Unsupported charset {charset!r}.", scope, receive, send)
            return

        declared = headers.get("content-length", "")
        if is_ascii_digits(declared) and int(declared) > self.limit:
            await self._reject(413, "Request body too large.", scope, receive, send)
            return

        body = b""
        more_body = True
        while more_body:
            message = await receive()
            if message["type"] == "http.disconnect":
                return
            body += message.get("body", b"")
            more_body = message.get("more_body", False)
            if len(body) > self.limit:
                await self._reject(413, "Request body too large.", scope, receive, send)
                return

        if body:
            try:
                value = self._decode(body)
            except ValueError as exc:
                await self._reject(400, str(exc), scope, receive, send)
                return
            scope.setdefault("state", {})["json"] = value

        replayed = False

        async def replay() -> Message:
            nonlocal replayed
            if not replayed:
                replayed = True
                return {"type": "http.request", "body": body, "more_body": False}
            return await receive()

        await self.app(scope, replay, send)

    @staticmethod
    def _decode(body: bytes) -> Any:
        # Strict mode: only objects and arrays are accepted at the top level.
        stripped = body.lstrip(_WHITESPACE)
        if stripped[:1] not in (b"{", b"["):
            raise ValueError("JSON body must be an object or an array.")
        try:
            return json.loads(body.decode("utf-8"))
        except UnicodeDecodeError:
            raise ValueError("JSON body is not valid UTF-8.") from None
        except json.JSONDecodeError as exc:
            raise ValueError(
                f"Malformed JSON body: {exc.msg} (line {exc.lineno}, column {exc.colno})."
            ) from None

    @staticmethod
    async def _reject(
        status_code: int, detail: str, scope: Scope, receive: Receive, send: Send
    ) -> None:
        response = JSONResponse({"detail": detail}, status_code=status_code)
        await response(scope, receive, send)
