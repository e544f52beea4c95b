from __future__ import annotations

import pytest

from argonrefine import (
    BenchmarkSample,
    Classification,
    InvalidConfigError,
    RecommendationConfig,
    aggregate,
    decide,
    run_search,
)
from argonrefine.search import MEMORY_MASK, quantize, probe_budget, search_time_cost

from conftest import linear_latency


def _recording(fn):
    seen = []

    def _measure(time_cost: int, memory_cost: int) -> int:
        seen.append((time_cost, memory_cost))
        return fn(time_cost, memory_cost)

    return _measure, seen


def test_bisection_walks_right_after_a_hit_without_dedup() -> None:
    # 1 ms per KiB; window [36, 44]
    config = RecommendationConfig(target_ms=40, tolerance=4, min_memory=0, max_memory=65536, min_time=1, max_time=1)
    measure, seen = _recording(lambda t, m: m // 1024)

    found = search_time_cost(config, 1, measure)

    assert [m for _, m in seen] == [0, 32768, 49152, 40960, 40960, 40960, 40960]
    assert found == [BenchmarkSample(memory_cost=40960, time_cost=1, measured_ms=40)] * 4


def test_negative_memory_cost_is_clamped_before_masking() -> None:
    config = RecommendationConfig(target_ms=10, min_memory=0, max_memory=65536, min_time=1, max_time=1)
    measure, seen = _recording(lambda t, m: 10_000)

    assert search_time_cost(config, 1, measure) == []
    assert len(seen) == 7
    assert all(m == 0 for _, m in seen)


def test_quantize_masks_to_8_kib() -> None:
    assert quantize(8191) == 0
    assert quantize(8192) == 8192
    assert quantize(45056) == 40960
    assert quantize(-1) == 0
    assert MEMORY_MASK & 8191 == 0


def test_span_below_1024_performs_no_probes() -> None:
    config = RecommendationConfig(min_memory=8192, max_memory=8192 + 1023, min_time=1, max_time=3)
    measure, seen = _recording(linear_latency)
    assert run_search(config, measure) == []
    assert seen == []
    assert probe_budget(config) == 0


def test_scan_is_linear_and_ascending_over_time_cost() -> None:
    config = RecommendationConfig(target_ms=500, min_time=2, max_time=5)
    measure, seen = _recording(linear_latency)
    run_search(config, measure)
    times = [t for t, _ in seen]
    assert times == sorted(times)
    assert set(times) == {2, 3, 4, 5}
    assert len(seen) == probe_budget(config)


@pytest.mark.parametrize(
    "latency",
    [lambda t, m: 0, lambda t, m: 10 ** 9],
    ids=["always-fast", "always-slow"],
)
def test_search_terminates_without_candidates(latency) -> None:
    config = RecommendationConfig(target_ms=500)
    measure, seen = _recording(latency)
    assert run_search(config, measure) == []
    # 256 MiB - 16 MiB halves 18 times before dropping under 1 KiB
    assert len(seen) == 18 * 8 == probe_budget(config)


def test_default_bounds_yield_valid_candidates() -> None:
    config = RecommendationConfig(target_ms=500)
    measure, _ = _recording(linear_latency)
    samples = aggregate(run_search(config, measure))

    assert samples
    for sample in samples:
        assert sample.memory_cost % 8192 == 0
        assert decide(config, sample.measured_ms) is Classification.IN_RANGE
        assert config.min_time <= sample.time_cost <= config.max_time
    assert [s.measured_ms for s in samples] == sorted((s.measured_ms for s in samples), reverse=True)


def test_progress_callback_sees_every_probe() -> None:
    config = RecommendationConfig(target_ms=40, tolerance=4, min_memory=0, max_memory=65536, min_time=1, max_time=1)
    events = []
    run_search(config, lambda t, m: m // 1024, progress_cb=lambda *args: events.append(args))
    assert len(events) == 7
    assert events[3] == (1, 40960, 40, Classification.IN_RANGE)


def test_aggregate_orders_slowest_first_and_keeps_duplicates() -> None:
    a = BenchmarkSample(memory_cost=8192, time_cost=2, measured_ms=300)
    b = BenchmarkSample(memory_cost=16384, time_cost=2, measured_ms=450)
    c = BenchmarkSample(memory_cost=16384, time_cost=2, measured_ms=450)
    d = BenchmarkSample(memory_cost=24576, time_cost=3, measured_ms=390)
    ordered = aggregate([a, b, d, c])
    assert [s.measured_ms for s in ordered] == [450, 450, 390, 300]
    assert ordered.count(b) == 2


def test_sample_serialises_with_legacy_keys() -> None:
    sample = BenchmarkSample(memory_cost=65536, time_cost=3, measured_ms=512)
    assert sample.to_dict() == {"mem_cost": 65536, "time_cost": 3, "bench_time": 512}


@pytest.mark.parametrize("min_memory", [10000, 8191, 16777216 + 1024])
def test_unaligned_lower_bound_is_rejected(min_memory: int) -> None:
    # a hit on the very first probe would otherwise record min_memory as is
    with pytest.raises(InvalidConfigError):
        RecommendationConfig(target_ms=40, tolerance=40, min_memory=min_memory, max_memory=min_memory + 65536)


def test_first_probe_hit_is_aligned() -> None:
    config = RecommendationConfig(target_ms=40, tolerance=40, min_memory=8192, max_memory=8192 + 65536, min_time=1, max_time=1)
    samples = run_search(config, lambda t, m: m // 1024)
    assert samples[0].memory_cost == 8192
    assert all(s.memory_cost % 8192 == 0 for s in samples)
