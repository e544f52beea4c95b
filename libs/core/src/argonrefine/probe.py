from __future__ import annotations
"""Single-shot timing of one hash computation."""

import logging
import secrets
import time

from .interfaces import HashBackend

log = logging.getLogger(__name__)

PROBE_BYTES = 64
FALLBACK_PROBE_VALUE = b"X" * (PROBE_BYTES * 2)


def generate_probe_value() -> bytes:
    """128 hex characters from 64 random bytes.

    Never raises: if the OS randomness source is unavailable the fixed
    filler value is returned instead. The probe's entropy only affects how
    realistic the timing is, not the search itself.
    """
    try:
        return secrets.token_hex(PROBE_BYTES).encode("ascii")
    except (NotImplementedError, OSError) as exc:
        log.debug("randomness unavailable, using fallback probe value: %s", exc)
        return FALLBACK_PROBE_VALUE


def measure(backend: HashBackend, time_cost: int, memory_cost: int, probe_value: bytes) -> int:
    """Run the hash exactly once and return the wall-clock time in whole ms.

    No warm-up, no repetition, no outlier rejection.
    """
    start = time.perf_counter()
    backend.hash(probe_value, time_cost, memory_cost)
    stop = time.perf_counter()
    # elapsed is non-negative, so this rounds half up
    return int(1000 * (stop - start) + 0.5)
