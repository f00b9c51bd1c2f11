import os

# Must be set before the app (and its settings) are imported
os.environ["AI_MODE"] = "mock"
os.environ["RATE_LIMIT_ENABLED"] = "false"

import pytest
from fastapi.testclient import TestClient

import fakeredis
import fakeredis.aioredis

from mealcart.main import app
from mealcart.infra import redis_client


@pytest.fixture(autouse=True)
def mock_redis():
    server = fakeredis.FakeServer()
    async_redis = fakeredis.aioredis.FakeRedis(server=server, decode_responses=True)

    # Force the client into the infra module
    redis_client._redis_async = async_redis

    yield async_redis

    # Cleanup
    redis_client._redis_async = None


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture
def shopping_items():
    return [
        {"id": 1, "name": "Whole Milk", "quantity": "1", "unit": "gal", "category": "Dairy & Eggs"},
        {"id": 2, "name": "Bananas", "quantity": "6", "unit": "piece", "category": "Produce"},
        {"id": 3, "name": "Ground Beef", "quantity": "2", "unit": "lb", "category": "Meat & Seafood"},
        {"id": 4, "name": "Paper Towels", "category": "Other"},
    ]
