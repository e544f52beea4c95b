from __future__ import annotations
"""Frozen configuration snapshot consumed by the search."""

from dataclasses import dataclass, field, asdict
from typing import Any, Dict, Optional

from .backends import Backend, normalize_backend
from .errors import InvalidConfigError
from .policy import effective_tolerance, window

DEFAULT_TARGET_MS = 500
DEFAULT_MIN_MEMORY = 16777216    # 16 MiB
DEFAULT_MAX_MEMORY = 268435456   # 256 MiB
DEFAULT_MIN_TIME = 2
DEFAULT_MAX_TIME = 9
# memory costs are probed in 8 KiB steps; the first probe is min_memory itself
MEMORY_QUANTUM = 8192


@dataclass(frozen=True)
class RecommendationConfig:
    target_ms: int = DEFAULT_TARGET_MS
    tolerance: Optional[int] = None
    backend: Backend = Backend.AUTO
    min_memory: int = DEFAULT_MIN_MEMORY
    max_memory: int = DEFAULT_MAX_MEMORY
    min_time: int = DEFAULT_MIN_TIME
    max_time: int = DEFAULT_MAX_TIME
    probe_value: bytes = field(default=b"", repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "backend", normalize_backend(self.backend))
        if self.target_ms <= 0:
            raise InvalidConfigError(f"target must be positive, got {self.target_ms}")
        if self.tolerance is not None and self.tolerance < 0:
            raise InvalidConfigError(f"tolerance cannot be negative, got {self.tolerance}")
        if self.min_memory < 0:
            raise InvalidConfigError(f"min_memory cannot be negative, got {self.min_memory}")
        if self.min_memory % MEMORY_QUANTUM:
            raise InvalidConfigError(
                f"min_memory must be a multiple of {MEMORY_QUANTUM} bytes, got {self.min_memory}"
            )
        if self.min_memory > self.max_memory:
            raise InvalidConfigError(
                f"min_memory ({self.min_memory}) exceeds max_memory ({self.max_memory})"
            )
        if self.min_time < 1:
            raise InvalidConfigError(f"min_time must be at least 1, got {self.min_time}")
        if self.min_time > self.max_time:
            raise InvalidConfigError(
                f"min_time ({self.min_time}) exceeds max_time ({self.max_time})"
            )

    @property
    def effective_tolerance(self) -> int:
        return effective_tolerance(self.target_ms, self.tolerance)

    @property
    def window(self):
        return window(self.target_ms, self.tolerance)

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d.pop("probe_value")
        d["backend"] = self.backend.value
        d["effective_tolerance"] = self.effective_tolerance
        return d
