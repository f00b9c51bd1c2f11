import logging
from fastapi import APIRouter

from ..core.ai_client import ai_client
from ..infra.redis_client import get_redis
from ..settings import settings

logger = logging.getLogger("mealcart.ready")

router = APIRouter()


@router.get("/ready")
async def ready():
    """Readiness plus dependency status. A dead Redis only disables the AI category cache."""
    redis_ok = False
    try:
        r = await get_redis()
        redis_ok = bool(await r.ping())
    except Exception as e:
        logger.warning("Redis ping failed: %s", e)

    return {
        "ok": True,
        "redis_ok": redis_ok,
        "ai_mode": settings.ai_mode,
        "ai_available": ai_client.is_available(),
        "ai_last_error": ai_client.last_error,
    }
