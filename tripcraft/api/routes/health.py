"""Health check endpoints."""

import json
from typing import Any

import redis
from fastapi import APIRouter, Response

from tripcraft.config import Settings, get_settings

router = APIRouter()


async def check_redis(settings: Settings) -> tuple[bool, str]:
    """Check Redis connectivity of the oracle cache.

    Returns:
        (is_ok, status_message)
    """
    if not settings.redis_url:
        return (True, "not_configured")

    try:
        client = redis.from_url(settings.redis_url, decode_responses=True)  # type: ignore[no-untyped-call]
        client.ping()
        return (True, "ok")
    except Exception as e:
        return (False, f"error: {type(e).__name__}")


def check_oracle(settings: Settings) -> str:
    """Report which oracle client is configured."""
    api_key = settings.openai_api_key
    if api_key and api_key.get_secret_value():
        return "openai"
    return "stub"


@router.get("/health")
async def health() -> dict[str, str]:
    """Simple liveness check.

    Returns:
        200 OK always (application is running)
    """
    return {"status": "ok"}


@router.get("/healthz", response_model=None)
async def healthz() -> dict[str, Any] | Response:
    """Readiness check.

    Returns:
        200 with component status if the cache backend is reachable,
        503 otherwise
    """
    settings = get_settings()
    redis_ok, redis_status = await check_redis(settings)

    response_body = {
        "status": "ok" if redis_ok else "degraded",
        "components": {
            "cache": redis_status,
            "oracle": check_oracle(settings),
        },
    }

    if not redis_ok:
        return Response(
            content=json.dumps(response_body),
            status_code=503,
            media_type="application/json",
        )

    return response_body
