import random
from concurrent.futures import ThreadPoolExecutor

import pytest

from earning_engine.services.metrics_generator import MetricsGenerator
from fakes import FixedRandom


def test_initialize_draws_hourly_rate_from_configured_range() -> None:
    rng = FixedRandom(fraction=0.5)
    generator = MetricsGenerator(rng=rng, hourly_rate_range=(15.0, 25.0))

    record = generator.initialize("0xABC", active_positions=3)
    assert record.hourly_rate == 20.0
    assert record.total_profit == 0.0
    assert record.daily_profit == 0.0
    assert record.active_positions == 3
    assert rng.calls == [(15.0, 25.0)]


def test_keyed_read_creates_default_record_and_nudges_profit() -> None:
    generator = MetricsGenerator(rng=FixedRandom(fraction=1.0))

    first = generator.read("0xABC")
    assert first.hourly_rate == 15.0
    assert first.total_profit == 2.0
    assert first.daily_profit == 360.0
    assert first.active_positions == 0

    second = generator.read("0xABC")
    assert second.total_profit == 4.0
    assert generator.count() == 1


def test_keyed_reads_are_monotonic_with_real_randomness() -> None:
    generator = MetricsGenerator(rng=random.Random(7))
    generator.initialize("0xABC", active_positions=2)

    previous = 0.0
    for _ in range(50):
        record = generator.read("0xABC")
        assert record.total_profit >= previous
        assert record.total_profit - previous <= 2.0 + 1e-9
        assert record.daily_profit == record.hourly_rate * 24
        previous = record.total_profit


def test_sample_stays_in_presentational_ranges_and_touches_nothing() -> None:
    low = MetricsGenerator(rng=FixedRandom(fraction=0.0)).sample()
    assert (low.total_profit, low.hourly_rate, low.daily_profit) == (1250.5, 15.0, 360.0)

    generator = MetricsGenerator(rng=FixedRandom(fraction=1.0))
    high = generator.read(None)
    assert (high.total_profit, high.hourly_rate, high.daily_profit) == (1350.5, 25.0, 480.0)
    assert high.active_positions == 7
    assert generator.count() == 0


def test_empty_wallet_is_treated_as_anonymous() -> None:
    generator = MetricsGenerator(rng=random.Random(1))
    generator.read("")
    assert generator.count() == 0


def test_returned_records_are_copies() -> None:
    generator = MetricsGenerator(rng=FixedRandom())
    record = generator.read("0xABC")
    record.total_profit = -100.0

    stored = generator.get("0xABC")
    assert stored is not None
    assert stored.total_profit == 1.0


def test_concurrent_reads_on_one_wallet_do_not_lose_updates() -> None:
    generator = MetricsGenerator(rng=FixedRandom(fraction=0.5))

    with ThreadPoolExecutor(max_workers=8) as pool:
        list(pool.map(lambda _: generator.read("0xABC"), range(200)))

    stored = generator.get("0xABC")
    assert stored is not None
    assert stored.total_profit == pytest.approx(200.0)


def test_inverted_hourly_rate_range_is_rejected() -> None:
    with pytest.raises(ValueError):
        MetricsGenerator(hourly_rate_range=(25.0, 15.0))
