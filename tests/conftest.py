from __future__ import annotations

import random
from collections.abc import AsyncIterator

import pytest
from httpx import ASGITransport, AsyncClient

from earning_engine.config import get_settings
from earning_engine.main import build_engine_service, create_app
from earning_engine.services.engine_service import EngineService


@pytest.fixture(autouse=True)
def test_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PORT", "3000")
    monkeypatch.delenv("HOURLY_RATE_MIN", raising=False)
    monkeypatch.delenv("HOURLY_RATE_MAX", raising=False)
    get_settings.cache_clear()

    yield

    get_settings.cache_clear()


@pytest.fixture
def engine_service() -> EngineService:
    return build_engine_service(rng=random.Random(1234))


@pytest.fixture
async def api_client(engine_service: EngineService) -> AsyncIterator[AsyncClient]:
    transport = ASGITransport(app=create_app(engine_service=engine_service))
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
