from __future__ import annotations

import random
from threading import Lock
from typing import Protocol

from earning_engine.models.schemas import MetricsRecord

DEFAULT_HOURLY_RATE = 15.0
HOURS_PER_DAY = 24

# Ranges for the anonymous sample payload.
SAMPLE_TOTAL_PROFIT = (1250.50, 1350.50)
SAMPLE_DAILY_PROFIT = (360.0, 480.0)
SAMPLE_ACTIVE_POSITIONS = 7

# Each keyed read adds U(0, MAX_PROFIT_STEP) to totalProfit.
MAX_PROFIT_STEP = 2.0


class RandomSource(Protocol):
    def uniform(self, a: float, b: float) -> float: ...


class MetricsGenerator:
    """Per-wallet synthetic earnings, nudged upward on every keyed read.

    Records are created lazily and never removed; stopping a session leaves its
    record in place for the lifetime of the process. ``rng`` is anything with a
    ``uniform(a, b)`` method, so tests can pass ``random.Random(seed)`` or a stub.
    """

    def __init__(
        self,
        rng: RandomSource | None = None,
        hourly_rate_range: tuple[float, float] = (15.0, 25.0),
    ) -> None:
        low, high = hourly_rate_range
        if low > high:
            raise ValueError("hourly_rate_range must be (low, high) with low <= high")

        self._lock = Lock()
        self._records: dict[str, MetricsRecord] = {}
        self._rng: RandomSource = rng if rng is not None else random.Random()
        self._hourly_rate_range = (float(low), float(high))

    def initialize(self, wallet_address: str, active_positions: int = 0) -> MetricsRecord:
        """(Re)create the record for a freshly started session."""

        with self._lock:
            record = MetricsRecord(
                total_profit=0.0,
                hourly_rate=self._rng.uniform(*self._hourly_rate_range),
                daily_profit=0.0,
                active_positions=active_positions,
            )
            self._records[wallet_address] = record
            return record.model_copy()

    def read(self, wallet_address: str | None = None) -> MetricsRecord:
        if not wallet_address:
            return self.sample()

        with self._lock:
            record = self._records.get(wallet_address)
            if record is None:
                record = MetricsRecord(hourly_rate=DEFAULT_HOURLY_RATE)
                self._records[wallet_address] = record

            record.total_profit += self._rng.uniform(0.0, MAX_PROFIT_STEP)
            record.daily_profit = record.hourly_rate * HOURS_PER_DAY
            return record.model_copy()

    def sample(self) -> MetricsRecord:
        """Illustrative figures for callers that did not identify a wallet. Touches no state."""

        return MetricsRecord(
            total_profit=self._rng.uniform(*SAMPLE_TOTAL_PROFIT),
            hourly_rate=self._rng.uniform(*self._hourly_rate_range),
            daily_profit=self._rng.uniform(*SAMPLE_DAILY_PROFIT),
            active_positions=SAMPLE_ACTIVE_POSITIONS,
        )

    def get(self, wallet_address: str) -> MetricsRecord | None:
        with self._lock:
            record = self._records.get(wallet_address)
            return record.model_copy() if record is not None else None

    def count(self) -> int:
        with self._lock:
            return len(self._records)
