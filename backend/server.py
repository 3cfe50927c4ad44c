"""Process-level server bootstrap.

``listen()`` binds the FastAPI app to a TCP port through uvicorn and blocks
for the lifetime of the process.  A one-line notice is printed once the socket
is bound::

    [server] Server running on port 3000

If the port cannot be bound, uvicorn logs the OS error and exits the process
with a non-zero status; nothing is retried.
"""

from __future__ import annotations

import socket
from typing import Optional

import uvicorn
from fastapi import FastAPI

from backend.config import settings


class NotifyingServer(uvicorn.Server):
    """uvicorn server that announces the bound port after startup."""

    async def startup(self, sockets: Optional[list[socket.socket]] = None) -> None:
        await super().startup(sockets=sockets)
        if not self.should_exit:
            print(f"[server] Server running on port {self.config.port}")


def build_server(
    app: FastAPI,
    port: Optional[int] = None,
    host: Optional[str] = None,
    log_level: Optional[str] = None,
) -> NotifyingServer:
    """Return an unstarted server for *app*, falling back to ``settings``."""
    config = uvicorn.Config(
        app,
        host=host or settings.host,
        port=port or settings.port,
        log_level=log_level or settings.log_level,
    )
    return NotifyingServer(config)


def listen(
    app: FastAPI,
    port: Optional[int] = None,
    host: Optional[str] = None,
    log_level: Optional[str] = None,
) -> None:
    """Serve *app* until the process is stopped."""
    build_server(app, port=port, host=host, log_level=log_level).run()
