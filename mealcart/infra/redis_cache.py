import json
from typing import Any, Optional

from .redis_client import get_redis

KEY_PREFIX = "mealcart"


def cache_key(*parts: str) -> str:
    """cache_key("category", "ai", "banana") -> "mealcart:category:ai:banana" """
    return ":".join((KEY_PREFIX, *parts))


async def get_json(key: str) -> Optional[Any]:
    r = await get_redis()
    raw = await r.get(key)
    return json.loads(raw) if raw else None


async def set_json(key: str, value: Any, ttl_sec: int) -> None:
    r = await get_redis()
    await r.set(key, json.dumps(value), ex=ttl_sec)
