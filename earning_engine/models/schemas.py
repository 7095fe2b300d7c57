from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def epoch_ms() -> int:
    return int(utcnow().timestamp() * 1000)


class CamelModel(BaseModel):
    """Snake-case attributes in Python, camelCase keys on the wire."""

    model_config = ConfigDict(populate_by_name=True)


class EngineSession(CamelModel):
    wallet_address: str = Field(alias="walletAddress")
    mining_contract: Any = Field(default=None, alias="miningContract")
    strategies: list[Any] = Field(default_factory=list)
    # Epoch milliseconds.
    started_at: int = Field(default_factory=epoch_ms, alias="startTime")
    active: bool = True


class MetricsRecord(CamelModel):
    total_profit: float = Field(default=0.0, alias="totalProfit")
    hourly_rate: float = Field(default=15.0, alias="hourlyRate")
    daily_profit: float = Field(default=0.0, alias="dailyProfit")
    active_positions: int = Field(default=0, alias="activePositions")


class StartEngineRequest(CamelModel):
    wallet_address: str | None = Field(default=None, alias="walletAddress")
    mining_contract: Any = Field(default=None, alias="miningContract")
    strategies: list[Any] | None = None


class StopEngineRequest(CamelModel):
    wallet_address: str | None = Field(default=None, alias="walletAddress")


class StartEngineResponse(CamelModel):
    success: bool = True
    message: str = "Engine started successfully"
    session: EngineSession
    timestamp: datetime = Field(default_factory=utcnow)


class StopEngineResponse(CamelModel):
    success: bool = True
    message: str = "Engine stopped successfully"
    timestamp: datetime = Field(default_factory=utcnow)


class MetricsResponse(MetricsRecord):
    timestamp: datetime = Field(default_factory=utcnow)


class HealthResponse(CamelModel):
    status: str = "online"
    message: str
    version: str
    timestamp: datetime = Field(default_factory=utcnow)


class StatusResponse(CamelModel):
    status: str = "operational"
    active_sessions: int = Field(alias="activeSessions")
    uptime: float
    memory: dict[str, int]
    timestamp: datetime = Field(default_factory=utcnow)


class ErrorResponse(BaseModel):
    error: str


class NotFoundResponse(CamelModel):
    error: str = "Endpoint not found"
    available_endpoints: list[str] = Field(alias="availableEndpoints")
