import pytest
from mealcart.infra.redis_client import get_redis
from mealcart.infra.redis_cache import cache_key, get_json, set_json

@pytest.mark.asyncio
async def test_redis_connection():
    r = await get_redis()
    assert await r.ping() is True

@pytest.mark.asyncio
async def test_json_round_trip():
    key = "test:cache:1"
    await set_json(key, {"category": "Produce", "confidence": 0.33}, 10)

    assert await get_json(key) == {"category": "Produce", "confidence": 0.33}

    r = await get_redis()
    ttl = await r.ttl(key)
    assert 0 < ttl <= 10

@pytest.mark.asyncio
async def test_get_json_miss():
    assert await get_json("test:cache:missing") is None

def test_cache_key_is_namespaced():
    assert cache_key("category", "ai", "green apple") == "mealcart:category:ai:green apple"
