from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
for candidate in (
    ROOT / "libs" / "core" / "src",
    ROOT / "libs" / "adapters" / "argon2" / "src",
    ROOT / "libs" / "adapters" / "sodium" / "src",
    ROOT / "apps" / "cli" / "src",
):
    candidate_str = str(candidate)
    if candidate_str not in sys.path:
        sys.path.insert(0, candidate_str)

from argonrefine import backends, registry  # noqa: E402


class FakeBackend:
    """Records calls instead of hashing."""
    name = "fake"
    available = True
    calls: list = []

    @classmethod
    def is_available(cls) -> bool:
        return cls.available

    def hash(self, secret: bytes, time_cost: int, memory_cost: int) -> None:
        type(self).calls.append((secret, time_cost, memory_cost))


def make_backend(name: str, available: bool = True) -> type:
    return type(f"Fake_{name}", (FakeBackend,), {"name": name, "available": available, "calls": []})


@pytest.fixture
def fake_registry(monkeypatch: pytest.MonkeyPatch):
    """Replace the real adapters with recording fakes for 'argon' and 'sodium'."""
    original_items = dict(registry._items)  # type: ignore[attr-defined]
    fakes = {"argon": make_backend("argon"), "sodium": make_backend("sodium")}
    registry._items.clear()  # type: ignore[attr-defined]
    registry._items.update(fakes)  # type: ignore[attr-defined]
    monkeypatch.setattr(backends, "_LOADED", True)
    try:
        yield fakes
    finally:
        registry._items.clear()  # type: ignore[attr-defined]
        registry._items.update(original_items)  # type: ignore[attr-defined]


def linear_latency(time_cost: int, memory_cost: int) -> int:
    """5 ms per MiB per pass."""
    return time_cost * (memory_cost >> 20) * 5


@pytest.fixture
def modelled_measure(monkeypatch: pytest.MonkeyPatch):
    """Make every timing probe return ``linear_latency`` and log the calls."""
    from argonrefine import recommender

    calls: list = []

    def _measure(backend, time_cost, memory_cost, probe_value):
        calls.append((backend.name, time_cost, memory_cost, probe_value))
        return linear_latency(time_cost, memory_cost)

    monkeypatch.setattr(recommender, "measure", _measure)
    return calls
