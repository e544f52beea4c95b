"""Adapter package for the argon2-cffi backend ('argon').

Importing the package registers the backend into the core registry.
"""

import warnings

_available = False

try:
    from . import argon2_adapter as _argon2_adapter  # noqa: F401
except Exception as exc:  # pragma: no cover - best effort message
    warnings.warn(f"argonrefine_argon2 disabled: {exc}")
else:
    _available = _argon2_adapter.Argon2Backend.is_available()

__all__ = ["_available"]
