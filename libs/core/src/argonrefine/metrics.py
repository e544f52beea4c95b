from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, List, TYPE_CHECKING

if TYPE_CHECKING:
    from .config import RecommendationConfig

"""Result containers produced by the search.

``BenchmarkSample`` is only ever created for an in-range measurement.
``BenchmarkResult`` bundles the ordered samples with what the run used.
"""

@dataclass(frozen=True)
class BenchmarkSample:
    memory_cost: int   # bytes, multiple of 8192
    time_cost: int
    measured_ms: int

    def to_dict(self) -> Dict[str, int]:
        return {
            "mem_cost": self.memory_cost,
            "time_cost": self.time_cost,
            "bench_time": self.measured_ms,
        }

@dataclass
class BenchmarkResult:
    samples: List[BenchmarkSample]
    config: "RecommendationConfig"
    backend: str   # resolved backend, never 'auto'
    probes: int = 0

    @property
    def best(self) -> BenchmarkSample | None:
        return self.samples[0] if self.samples else None
