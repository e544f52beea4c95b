from __future__ import annotations
"""Fluent front end for the parameter search.

    >>> rec = ParameterRecommender.for_requests_per_second(4)
    >>> rec.specify_backend("libargon2").set_max_time(4)
    >>> rec.run_benchmarks()  # doctest: +SKIP
    [BenchmarkSample(memory_cost=..., time_cost=..., measured_ms=...), ...]

Setters mutate the builder; every run works on an immutable snapshot taken
when it starts.
"""

import logging
from typing import List, Optional

from .backends import Backend, get_probe, normalize_backend, resolve_backend
from .config import (
    DEFAULT_MAX_MEMORY,
    DEFAULT_MAX_TIME,
    DEFAULT_MIN_MEMORY,
    DEFAULT_MIN_TIME,
    DEFAULT_TARGET_MS,
    RecommendationConfig,
)
from .errors import InvalidConfigError, InvalidRequestRateError
from .metrics import BenchmarkResult, BenchmarkSample
from .policy import Classification, classify
from .probe import generate_probe_value, measure
from .search import ProgressFn, aggregate, probe_budget, run_search

log = logging.getLogger(__name__)


class ParameterRecommender:

    def __init__(self, milliseconds: int = DEFAULT_TARGET_MS) -> None:
        self._target_ms = milliseconds
        self._backend = Backend.AUTO
        self._tolerance: Optional[int] = None
        self._min_memory = DEFAULT_MIN_MEMORY
        self._max_memory = DEFAULT_MAX_MEMORY
        self._min_time = DEFAULT_MIN_TIME
        self._max_time = DEFAULT_MAX_TIME
        self._probe_value = generate_probe_value()

    @classmethod
    def for_requests_per_second(cls, requests_per_second: int = 5) -> "ParameterRecommender":
        if requests_per_second < 1:
            raise InvalidRequestRateError("Requests per second cannot be zero or negative")
        # round half up
        return cls((2000 + requests_per_second) // (2 * requests_per_second))

    @property
    def target(self) -> int:
        return self._target_ms

    def get_target(self) -> int:
        return self._target_ms

    @property
    def backend(self) -> Backend:
        return self._backend

    def set_tolerance(self, distance: Optional[int] = None) -> "ParameterRecommender":
        if distance is not None and distance < 0:
            raise InvalidConfigError(f"tolerance cannot be negative, got {distance}")
        self._tolerance = distance
        return self

    def specify_backend(self, target: str) -> "ParameterRecommender":
        self._backend = normalize_backend(target)
        return self

    def set_min_memory(self, minimum: int) -> "ParameterRecommender":
        self._min_memory = minimum
        return self

    def set_max_memory(self, maximum: int) -> "ParameterRecommender":
        self._max_memory = maximum
        return self

    def set_min_time(self, minimum: int) -> "ParameterRecommender":
        self._min_time = minimum
        return self

    def set_max_time(self, maximum: int) -> "ParameterRecommender":
        self._max_time = maximum
        return self

    def snapshot(self) -> RecommendationConfig:
        return RecommendationConfig(
            target_ms=self._target_ms,
            tolerance=self._tolerance,
            backend=self._backend,
            min_memory=self._min_memory,
            max_memory=self._max_memory,
            min_time=self._min_time,
            max_time=self._max_time,
            probe_value=self._probe_value,
        )

    def decide(self, milliseconds: int) -> Classification:
        return classify(self._target_ms, self._tolerance, milliseconds)

    def get_millisecond_cost(self, time_cost: int, memory_cost: int) -> int:
        """Time one hash with the current backend (``auto`` resolved on this call)."""
        return measure(get_probe(self._backend), time_cost, memory_cost, self._probe_value)

    def run(self, *, progress_cb: Optional[ProgressFn] = None) -> BenchmarkResult:
        config = self.snapshot()
        concrete = resolve_backend(config.backend)
        probe = get_probe(concrete)
        probes = 0

        def _measure(time_cost: int, memory_cost: int) -> int:
            nonlocal probes
            probes += 1
            return measure(probe, time_cost, memory_cost, config.probe_value)

        log.info(
            "searching t=%d..%d m=%d..%d for %d ms +/- %d ms on %s (%d probes)",
            config.min_time,
            config.max_time,
            config.min_memory,
            config.max_memory,
            config.target_ms,
            config.effective_tolerance,
            concrete.value,
            probe_budget(config),
        )
        samples = aggregate(run_search(config, _measure, progress_cb=progress_cb))
        log.info("search finished: %d probe(s), %d candidate(s)", probes, len(samples))
        return BenchmarkResult(samples=samples, config=config, backend=concrete.value, probes=probes)

    def run_benchmarks(self) -> List[BenchmarkSample]:
        return self.run().samples
