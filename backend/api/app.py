"""FastAPI application factory.

Middleware
----------
Requests pass through two stages before route dispatch, in this order:

    CORS        - permissive cross-origin headers on every response,
                  ``OPTIONS`` preflights answered with 204
    JSON body   - parses ``application/json`` bodies, rejects malformed ones

Routers
-------
    /          - static API greeting

The generated OpenAPI/docs routes are switched off so that the route table
holds only the endpoints mounted here.
"""

from __future__ import annotations

from typing import Iterator, Optional

from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.routing import APIRoute

from backend.api.cors import AllowAllOriginsMiddleware
from backend.api.middleware import JSONBodyMiddleware
from backend.api.routers import root as root_router
from backend.config import Settings, settings as default_settings

# (router, tag) pairs mounted at the application root, in mount order.
ROUTERS: list[tuple[APIRouter, str]] = [
    (root_router.router, "root"),
]


def api_routes() -> Iterator[APIRoute]:
    """Yield every endpoint the application serves, in mount order."""
    for router, _tag in ROUTERS:
        for route in router.routes:
            if isinstance(route, APIRoute):
                yield route


def create_app(config: Optional[Settings] = None) -> FastAPI:
    """Return a fully-configured FastAPI application instance."""
    config = config or default_settings
    app = FastAPI(
        title="Event Swipe API",
        version="0.1.0",
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.settings = config

    # Starlette wraps in reverse order: the last middleware added runs first.
    app.add_middleware(JSONBodyMiddleware, limit=config.json_body_limit)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(AllowAllOriginsMiddleware)

    for router, tag in ROUTERS:
        app.include_router(router, tags=[tag])

    return app


# Module-level instance used by uvicorn:
#   uvicorn backend.api.app:app --port 3000
app = create_app()
