from __future__ import annotations

from fastapi import Request

from earning_engine.services.engine_service import EngineService


def get_engine_service(request: Request) -> EngineService:
    return request.app.state.engine_service
