from __future__ import annotations

from fastapi import APIRouter, Depends

from earning_engine.config import get_settings
from earning_engine.models.schemas import HealthResponse, StatusResponse
from earning_engine.services import process_stats
from earning_engine.services.engine_dependencies import get_engine_service
from earning_engine.services.engine_service import EngineService

router = APIRouter(tags=["system"])


@router.get("/", response_model=HealthResponse)
def health() -> HealthResponse:
    settings = get_settings()
    return HealthResponse(message=settings.service_name, version=settings.service_version)


@router.get("/api/status", response_model=StatusResponse)
def status(engine: EngineService = Depends(get_engine_service)) -> StatusResponse:
    return StatusResponse(
        active_sessions=engine.status()["count"],
        uptime=process_stats.uptime_seconds(),
        memory=process_stats.memory_usage(),
    )
