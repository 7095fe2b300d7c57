from __future__ import annotations

from fastapi import APIRouter, Body, Depends, Header, Query

from earning_engine.models.schemas import (
    MetricsResponse,
    StartEngineRequest,
    StartEngineResponse,
    StopEngineRequest,
    StopEngineResponse,
)
from earning_engine.services.engine_dependencies import get_engine_service
from earning_engine.services.engine_service import EngineService

router = APIRouter(prefix="/api/engine", tags=["engine"])


@router.post("/start", response_model=StartEngineResponse)
def start_engine(
    payload: StartEngineRequest | None = Body(default=None),
    engine: EngineService = Depends(get_engine_service),
) -> StartEngineResponse:
    payload = payload or StartEngineRequest()
    session = engine.start_session(
        payload.wallet_address,
        mining_contract=payload.mining_contract,
        strategies=payload.strategies,
    )
    return StartEngineResponse(session=session)


@router.post("/stop", response_model=StopEngineResponse)
def stop_engine(
    payload: StopEngineRequest | None = Body(default=None),
    engine: EngineService = Depends(get_engine_service),
) -> StopEngineResponse:
    payload = payload or StopEngineRequest()
    engine.stop_session(payload.wallet_address)
    return StopEngineResponse()


@router.get("/metrics", response_model=MetricsResponse)
def get_metrics(
    wallet: str | None = Query(default=None),
    x_wallet_address: str | None = Header(default=None),
    engine: EngineService = Depends(get_engine_service),
) -> MetricsResponse:
    # Query string takes precedence; an empty value falls through to the header.
    wallet_address = wallet or x_wallet_address
    record = engine.read_metrics(wallet_address)
    return MetricsResponse(**record.model_dump())
