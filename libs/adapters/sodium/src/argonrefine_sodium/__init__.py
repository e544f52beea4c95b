"""Adapter package for the libsodium backend ('sodium') via PyNaCl.

The backend is always registered; whether ``auto`` picks it depends on
``SodiumBackend.is_available()``.
"""

from . import sodium_adapter as _sodium_adapter  # noqa: F401

_available = _sodium_adapter.SodiumBackend.is_available()

__all__ = ["_available"]
