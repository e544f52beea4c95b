from __future__ import annotations
"""Tolerance-window classification of a measured latency."""

from enum import IntEnum
from typing import Optional, Tuple

from .errors import InvalidConfigError


class Classification(IntEnum):
    # values match the comparator convention: below / inside / above
    TOO_FAST = -1
    IN_RANGE = 0
    TOO_SLOW = 1


def effective_tolerance(target_ms: int, tolerance: Optional[int]) -> int:
    if tolerance is None:
        return target_ms >> 1
    if tolerance < 0:
        raise InvalidConfigError(f"tolerance cannot be negative, got {tolerance}")
    return tolerance


def window(target_ms: int, tolerance: Optional[int]) -> Tuple[int, int]:
    """Inclusive ``(min, max)`` latency bounds. ``min`` may be negative."""
    diff = effective_tolerance(target_ms, tolerance)
    return target_ms - diff, target_ms + diff


def classify(target_ms: int, tolerance: Optional[int], measured_ms: int) -> Classification:
    low, high = window(target_ms, tolerance)
    if measured_ms < low:
        return Classification.TOO_FAST
    if measured_ms > high:
        return Classification.TOO_SLOW
    return Classification.IN_RANGE


def decide(config, measured_ms: int) -> Classification:
    """Classify ``measured_ms`` against ``config.target_ms`` +/- its tolerance."""
    return classify(config.target_ms, config.tolerance, measured_ms)
