"""Health check routes."""

from datetime import datetime, timezone
from typing import Literal

import logfire
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter
from pydantic import BaseModel

from chatter.config import Settings
from chatter.domain.error import StoreUnavailableError
from chatter.domain.service import ThreadCache

router = APIRouter(tags=["health"], route_class=DishkaRoute)


class HealthResponse(BaseModel):
    """Health check response."""

    status: Literal["healthy", "degraded"]
    timestamp: datetime
    git_sha: str
    # Reads keep working without the cache, only slower
    thread_cache: Literal["ok", "unavailable"]


@router.get("/health", response_model=HealthResponse)
async def health_check(
    settings: FromDishka[Settings], thread_cache: FromDishka[ThreadCache]
) -> HealthResponse:
    """Report liveness and whether the thread cache backend answers."""
    try:
        await thread_cache.backend.get(f"{thread_cache.key_prefix}:health")
        cache_state = "ok"
    except StoreUnavailableError as e:
        logfire.warn("Health check: thread cache unavailable", error=str(e))
        cache_state = "unavailable"

    return HealthResponse(
        status="healthy" if cache_state == "ok" else "degraded",
        timestamp=datetime.now(timezone.utc),
        git_sha=settings.git_sha,
        thread_cache=cache_state,
    )
