from __future__ import annotations
"""Memory-cost bisection nested in a linear time-cost scan.

For every time cost in ``[min_time, max_time]`` the memory cost starts at
``min_memory`` and moves by a step that halves on every probe, up while the
hash is too fast and down while it is too slow. An in-range hit is recorded
and the walk continues upwards, so each time cost can contribute zero, one
or several samples, biased towards the largest acceptable memory cost.
"""

import logging
from typing import Callable, Iterable, List, Optional

from .config import RecommendationConfig
from .metrics import BenchmarkSample
from .policy import Classification, decide

log = logging.getLogger(__name__)

MIN_SPAN = 1024
# clears the low 13 bits: memory costs are probed in 8 KiB steps
MEMORY_MASK = 0x7FFFFFFFFFFFE000

# (time_cost, memory_cost) -> elapsed ms
MeasureFn = Callable[[int, int], int]
ProgressFn = Callable[[int, int, int, Classification], None]


def quantize(memory_cost: int) -> int:
    if memory_cost < 0:
        memory_cost = 0
    return memory_cost & MEMORY_MASK


def search_time_cost(
    config: RecommendationConfig,
    time_cost: int,
    measure: MeasureFn,
    *,
    progress_cb: Optional[ProgressFn] = None,
) -> List[BenchmarkSample]:
    """Bounded bisection over memory cost for one time cost."""
    found: List[BenchmarkSample] = []
    m = config.min_memory
    span = config.max_memory - config.min_memory
    while span >= MIN_SPAN:
        cost = measure(time_cost, m)
        decision = decide(config, cost)
        log.debug("t=%d m=%d -> %d ms (%s)", time_cost, m, cost, decision.name)
        if progress_cb is not None:
            progress_cb(time_cost, m, cost, decision)

        span >>= 1
        if decision is Classification.TOO_FAST:
            m += span
        elif decision is Classification.TOO_SLOW:
            m -= span
        else:
            found.append(BenchmarkSample(memory_cost=m, time_cost=time_cost, measured_ms=cost))
            # keep walking right: prefer the most memory that still fits
            m += span
        m = quantize(m)
    return found


def run_search(
    config: RecommendationConfig,
    measure: MeasureFn,
    *,
    progress_cb: Optional[ProgressFn] = None,
) -> List[BenchmarkSample]:
    """Scan every time cost and collect in-range samples, unordered."""
    samples: List[BenchmarkSample] = []
    for t in range(config.min_time, config.max_time + 1):
        hits = search_time_cost(config, t, measure, progress_cb=progress_cb)
        log.info("time_cost=%d: %d candidate(s)", t, len(hits))
        samples.extend(hits)
    return samples


def aggregate(samples: Iterable[BenchmarkSample]) -> List[BenchmarkSample]:
    """Order by measured latency, slowest first. Duplicates are kept."""
    return sorted(samples, key=lambda s: s.measured_ms, reverse=True)


def probe_budget(config: RecommendationConfig) -> int:
    """Number of probes a full run performs."""
    per_time = 0
    span = config.max_memory - config.min_memory
    while span >= MIN_SPAN:
        per_time += 1
        span >>= 1
    return per_time * (config.max_time - config.min_time + 1)
