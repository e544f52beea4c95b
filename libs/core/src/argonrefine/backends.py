from __future__ import annotations
"""Backend selection: name normalisation, ``auto`` resolution, adapter bootstrap.

Backends live in separate adapter packages that register a strategy class
into :data:`argonrefine.registry.registry` when imported. ``load_adapters``
imports whichever of them are installed (or present in the source tree).
"""

import importlib
import importlib.util
import logging
import pathlib
import sys
from enum import Enum
from typing import Dict, Tuple

from .errors import BackendUnavailableError, InvalidBackendError
from .interfaces import HashBackend
from .registry import registry

log = logging.getLogger(__name__)

_HERE = pathlib.Path(__file__).resolve()

try:
    _PROJECT_ROOT = next(p for p in _HERE.parents if (p / "libs").exists())
except StopIteration:
    _PROJECT_ROOT = _HERE.parents[0]

_ADAPTER_PATHS = {
    "argonrefine_argon2": _PROJECT_ROOT / "libs" / "adapters" / "argon2" / "src",
    "argonrefine_sodium": _PROJECT_ROOT / "libs" / "adapters" / "sodium" / "src",
}

_LOADED = False


class Backend(str, Enum):
    AUTO = "auto"
    ARGON = "argon"
    SODIUM = "sodium"


ALIASES: Dict[str, Backend] = {
    "auto": Backend.AUTO,
    "argon": Backend.ARGON,
    "sodium": Backend.SODIUM,
    "argon2": Backend.ARGON,
    "libargon": Backend.ARGON,
    "libargon2": Backend.ARGON,
    "nacl": Backend.SODIUM,
    "libsodium": Backend.SODIUM,
}


def load_adapters(force: bool = False) -> None:
    """Import the adapter packages so they register their backends."""
    global _LOADED
    if _LOADED and not force:
        return
    for mod in _ADAPTER_PATHS:
        spec = importlib.util.find_spec(mod)
        if spec is None:
            candidate = _ADAPTER_PATHS.get(mod)
            if candidate and candidate.exists():
                if str(candidate) not in sys.path:
                    sys.path.append(str(candidate))
                spec = importlib.util.find_spec(mod)
        if spec is None:
            log.warning("[adapter optional] %s not installed", mod)
            continue
        try:
            importlib.import_module(mod)
        except Exception as exc:
            log.warning("[adapter import error] %s: %s", mod, exc)
    _LOADED = True


def normalize_backend(name: str | Backend) -> Backend:
    """Map a selector or alias (case-insensitive) onto a :class:`Backend`."""
    if isinstance(name, Backend):
        return name
    try:
        return ALIASES[str(name).lower()]
    except KeyError:
        raise InvalidBackendError(str(name)) from None


def aliases_for(backend: Backend) -> Tuple[str, ...]:
    return tuple(alias for alias, target in ALIASES.items() if target is backend and alias != backend.value)


def backend_available(backend: Backend) -> bool:
    load_adapters()
    if not registry.has(backend.value):
        return False
    try:
        return bool(registry.get(backend.value).is_available())
    except Exception as exc:
        log.debug("capability check for %s failed: %s", backend.value, exc)
        return False


def sodium_available() -> bool:
    """True when the libsodium binding is importable and its pwhash is callable."""
    return backend_available(Backend.SODIUM)


def resolve_backend(backend: str | Backend) -> Backend:
    """Resolve ``auto`` to a concrete backend. Not cached between calls."""
    backend = normalize_backend(backend)
    if backend is not Backend.AUTO:
        return backend
    if sodium_available():
        return Backend.SODIUM
    return Backend.ARGON


def get_probe(backend: str | Backend) -> HashBackend:
    """Return a ready strategy instance for ``backend`` (``auto`` resolved here)."""
    concrete = resolve_backend(backend)
    if not backend_available(concrete):
        raise BackendUnavailableError(
            f"Backend '{concrete.value}' is not available; "
            f"install {'PyNaCl' if concrete is Backend.SODIUM else 'argon2-cffi'}"
        )
    cls = registry.get(concrete.value)
    return cls()
