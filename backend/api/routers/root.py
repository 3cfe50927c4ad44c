"""Root endpoint.

Routes
------
GET  /     Static greeting identifying the API
HEAD /     Same, headers only
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter

router = APIRouter()

API_MESSAGE = "Event Swipe API"


@router.api_route("/", methods=["GET", "HEAD"], response_model=dict[str, Any])
def read_root() -> dict[str, Any]:
    """Return the fixed greeting payload."""
    return {"message": API_MESSAGE}
