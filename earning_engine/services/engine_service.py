from __future__ import annotations

import logging
from threading import Lock
from typing import Any

from earning_engine.models.schemas import EngineSession, MetricsRecord
from earning_engine.services.metrics_generator import MetricsGenerator
from earning_engine.services.session_store import SessionStore

WALLET_REQUIRED = "Wallet address required"

logger = logging.getLogger(__name__)


class InvalidRequestError(ValueError):
    """The request is missing the wallet address that keys every engine operation."""


class EngineService:
    def __init__(self, sessions: SessionStore | None = None, metrics: MetricsGenerator | None = None) -> None:
        self.sessions = sessions if sessions is not None else SessionStore()
        self.metrics = metrics if metrics is not None else MetricsGenerator()
        # Session write and metrics reset for a wallet happen as one step.
        self._lock = Lock()

    def start_session(
        self,
        wallet_address: str | None,
        mining_contract: Any = None,
        strategies: list[Any] | None = None,
    ) -> EngineSession:
        if not wallet_address:
            raise InvalidRequestError(WALLET_REQUIRED)

        with self._lock:
            session = self.sessions.start(wallet_address, mining_contract=mining_contract, strategies=strategies)
            self.metrics.initialize(wallet_address, active_positions=len(session.strategies))

        logger.info(
            "engine.started",
            extra={"wallet_address": wallet_address, "strategy_count": len(session.strategies)},
        )
        return session

    def stop_session(self, wallet_address: str | None) -> None:
        if not wallet_address:
            raise InvalidRequestError(WALLET_REQUIRED)

        with self._lock:
            stopped = self.sessions.stop(wallet_address)

        logger.info("engine.stopped", extra={"wallet_address": wallet_address, "was_active": stopped is not None})

    def read_metrics(self, wallet_address: str | None = None) -> MetricsRecord:
        return self.metrics.read(wallet_address)

    def status(self) -> dict[str, int]:
        return {"count": self.sessions.count()}
