from __future__ import annotations
from typing import Protocol

"""Hashing backend interface used by adapters.

Adapters implement this Protocol and register themselves into the global
registry. The search and the CLI only ever talk to this interface, never to
argon2-cffi or PyNaCl directly.
"""

class HashBackend(Protocol):
    """One Argon2id hashing primitive. Memory cost is always in bytes."""
    name: str

    @classmethod
    def is_available(cls) -> bool: ...

    def hash(self, secret: bytes, time_cost: int, memory_cost: int) -> None: ...
