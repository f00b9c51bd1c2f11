from unittest.mock import AsyncMock, MagicMock

from mealcart.infra import redis_client


def test_ready(client):
    res = client.get("/api/ready")
    assert res.status_code == 200
    data = res.json()
    assert data["ok"] is True
    assert data["redis_ok"] is True
    # Tests run in mock mode
    assert data["ai_mode"] == "mock"
    assert data["ai_available"] is False


def test_ready_when_redis_down(client):
    broken = MagicMock()
    broken.ping = AsyncMock(side_effect=ConnectionError("redis down"))
    redis_client._redis_async = broken

    res = client.get("/api/ready")
    assert res.status_code == 200
    assert res.json()["ok"] is True
    assert res.json()["redis_ok"] is False
