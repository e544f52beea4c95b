from __future__ import annotations
import os

from argon2.low_level import Type, hash_secret_raw

from argonrefine import registry

SALT_LEN = 16
HASH_LEN = 32
KIB = 1024


def _parallelism() -> int:
    override = os.getenv("ARGONREFINE_ARGON2_PARALLELISM")
    if override:
        try:
            value = int(override)
        except ValueError as exc:
            raise ValueError("ARGONREFINE_ARGON2_PARALLELISM must be an integer") from exc
        if value < 1:
            raise ValueError("ARGONREFINE_ARGON2_PARALLELISM must be at least 1")
        return value
    return 1


@registry.register("argon")
class Argon2Backend:
    """Argon2id through argon2-cffi (the reference libargon2 implementation).

    argon2-cffi takes memory in KiB, so the byte count is divided by 1024 and
    raised to the library floor of 8 KiB per lane when smaller.
    """
    name = "argon"

    def __init__(self) -> None:
        self.parallelism = _parallelism()
        self.mech = f"argon2id-p{self.parallelism}"

    @classmethod
    def is_available(cls) -> bool:
        return callable(hash_secret_raw)

    def hash(self, secret: bytes, time_cost: int, memory_cost: int) -> None:
        hash_secret_raw(
            secret=secret,
            salt=os.urandom(SALT_LEN),
            time_cost=max(1, time_cost),
            memory_cost=max(8 * self.parallelism, memory_cost // KIB),
            parallelism=self.parallelism,
            hash_len=HASH_LEN,
            type=Type.ID,
        )
