from __future__ import annotations
import warnings

from argonrefine import registry
from argonrefine.errors import BackendUnavailableError


def try_import_argon2id():
    try:
        from nacl.pwhash import argon2id  # type: ignore
        return argon2id
    except Exception as exc:
        warnings.warn(f"argonrefine_sodium disabled: {exc}")
        return None


_argon2id = try_import_argon2id()


@registry.register("sodium")
class SodiumBackend:
    """Argon2id13 through libsodium's ``crypto_pwhash_str``.

    libsodium takes the memory limit in bytes; values under its minimum are
    raised to ``MEMLIMIT_MIN``.
    """
    name = "sodium"

    def __init__(self) -> None:
        if _argon2id is None:
            raise BackendUnavailableError("PyNaCl (libsodium) is not installed")
        self.mech = "argon2id13"

    @classmethod
    def is_available(cls) -> bool:
        return _argon2id is not None and callable(getattr(_argon2id, "str", None))

    def hash(self, secret: bytes, time_cost: int, memory_cost: int) -> None:
        _argon2id.str(
            secret,
            opslimit=max(_argon2id.OPSLIMIT_MIN, time_cost),
            memlimit=max(_argon2id.MEMLIMIT_MIN, memory_cost),
        )
