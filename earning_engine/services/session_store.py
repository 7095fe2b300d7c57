from __future__ import annotations

from threading import Lock
from typing import Any

from earning_engine.models.schemas import EngineSession


class SessionStore:
    """Thread-safe, process-local map of wallet address to engine session (resets on restart)."""

    def __init__(self) -> None:
        self._lock = Lock()
        self._sessions: dict[str, EngineSession] = {}

    def start(
        self,
        wallet_address: str,
        mining_contract: Any = None,
        strategies: list[Any] | None = None,
    ) -> EngineSession:
        session = EngineSession(
            wallet_address=wallet_address,
            mining_contract=mining_contract,
            strategies=list(strategies or []),
        )
        with self._lock:
            # A restart replaces the previous record outright.
            self._sessions[wallet_address] = session
        return session.model_copy(deep=True)

    def stop(self, wallet_address: str) -> EngineSession | None:
        with self._lock:
            session = self._sessions.pop(wallet_address, None)
            if session is None:
                return None
            session.active = False
            return session

    def get(self, wallet_address: str) -> EngineSession | None:
        with self._lock:
            session = self._sessions.get(wallet_address)
            return session.model_copy(deep=True) if session is not None else None

    def __contains__(self, wallet_address: object) -> bool:
        with self._lock:
            return wallet_address in self._sessions

    def count(self) -> int:
        with self._lock:
            return len(self._sessions)
