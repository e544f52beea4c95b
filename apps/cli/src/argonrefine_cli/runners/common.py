from __future__ import annotations
"""Shared helpers for the CLI commands.

Includes recommender construction from CLI options, size parsing,
environment metadata collection, and JSON export.
"""

import copy
import json
import os
import pathlib
import platform
import re
import subprocess
from importlib import metadata
from typing import Any, Dict, List, Optional

from argonrefine import BenchmarkResult, ParameterRecommender
from argonrefine.backends import Backend, aliases_for, backend_available, load_adapters, resolve_backend

try:
    import psutil  # type: ignore
except Exception:
    psutil = None

_ENVIRONMENT_CACHE: Dict[str, Any] | None = None

_SIZE_RE = re.compile(r"^\s*(\d+)\s*([kmgt]?)(i?b)?\s*$", re.IGNORECASE)
_SIZE_UNITS = {"": 1, "k": 1024, "m": 1024 ** 2, "g": 1024 ** 3, "t": 1024 ** 4}


def parse_size(value: str | int) -> int:
    """Parse ``"64M"``, ``"512KiB"``, ``"1g"`` or a plain byte count (binary units)."""
    if isinstance(value, int):
        return value
    match = _SIZE_RE.match(value)
    if not match:
        raise ValueError(f"Invalid size: {value!r}")
    number, unit, _ = match.groups()
    return int(number) * _SIZE_UNITS[unit.lower()]


def format_size(num_bytes: int) -> str:
    for unit, factor in (("GiB", 1024 ** 3), ("MiB", 1024 ** 2), ("KiB", 1024)):
        if num_bytes >= factor and num_bytes % factor == 0:
            return f"{num_bytes // factor} {unit}"
    return f"{num_bytes} B"


def build_recommender(
    *,
    target_ms: Optional[int] = None,
    rps: Optional[int] = None,
    tolerance: Optional[int] = None,
    backend: Optional[str] = None,
    min_memory: Optional[str] = None,
    max_memory: Optional[str] = None,
    min_time: Optional[int] = None,
    max_time: Optional[int] = None,
) -> ParameterRecommender:
    if rps is not None:
        rec = ParameterRecommender.for_requests_per_second(rps)
    elif target_ms is not None:
        rec = ParameterRecommender(target_ms)
    else:
        rec = ParameterRecommender()
    rec.set_tolerance(tolerance)
    if backend:
        rec.specify_backend(backend)
    if min_memory is not None:
        rec.set_min_memory(parse_size(min_memory))
    if max_memory is not None:
        rec.set_max_memory(parse_size(max_memory))
    if min_time is not None:
        rec.set_min_time(min_time)
    if max_time is not None:
        rec.set_max_time(max_time)
    return rec


def describe_backends() -> List[Dict[str, Any]]:
    load_adapters()
    rows = []
    for backend in (Backend.ARGON, Backend.SODIUM):
        rows.append(
            {
                "name": backend.value,
                "aliases": list(aliases_for(backend)),
                "available": backend_available(backend),
            }
        )
    rows.append({"name": Backend.AUTO.value, "aliases": [], "resolves_to": resolve_backend(Backend.AUTO).value})
    return rows


def _detect_cpu_model() -> str | None:
    system = platform.system()
    try:
        if system == "Darwin":
            out = subprocess.check_output(
                ["sysctl", "-n", "machdep.cpu.brand_string"],
                stderr=subprocess.DEVNULL,
                text=True,
            ).strip()
            if out:
                return out
        elif system == "Linux":
            cpuinfo = pathlib.Path("/proc/cpuinfo")
            if cpuinfo.exists():
                for line in cpuinfo.read_text(encoding="utf-8", errors="ignore").splitlines():
                    if line.lower().startswith("model name"):
                        return line.split(":", 1)[1].strip()
        elif system == "Windows":
            val = os.environ.get("PROCESSOR_IDENTIFIER")
            if val:
                return val
    except (OSError, subprocess.SubprocessError):
        pass
    return platform.processor() or platform.machine() or None


def _library_versions() -> Dict[str, str]:
    versions: Dict[str, str] = {}
    for dist in ("argon2-cffi", "PyNaCl"):
        try:
            versions[dist] = metadata.version(dist)
        except metadata.PackageNotFoundError:
            continue
    return versions


def _collect_environment_meta() -> Dict[str, Any]:
    global _ENVIRONMENT_CACHE
    if _ENVIRONMENT_CACHE is None:
        info: Dict[str, Any] = {}
        cpu_model = _detect_cpu_model()
        if cpu_model:
            info["cpu_model"] = cpu_model
        info["cpu_count"] = os.cpu_count()
        info["os"] = platform.platform(aliased=True)
        info["python"] = platform.python_version()
        if psutil is not None:
            info["memory_total_bytes"] = psutil.virtual_memory().total
        deps = _library_versions()
        if deps:
            info["dependencies"] = deps
        _ENVIRONMENT_CACHE = info
    return copy.deepcopy(_ENVIRONMENT_CACHE)


def _build_export_payload(result: BenchmarkResult) -> Dict[str, Any]:
    config = result.config
    low, high = config.window
    return {
        "target_ms": config.target_ms,
        "tolerance_ms": config.effective_tolerance,
        "window_ms": [low, high],
        "backend": result.backend,
        "bounds": {
            "memory": [config.min_memory, config.max_memory],
            "time": [config.min_time, config.max_time],
        },
        "probes": result.probes,
        "samples": [s.to_dict() for s in result.samples],
        "meta": _collect_environment_meta(),
    }


def export_json(result: BenchmarkResult, export_path: str | None) -> pathlib.Path | None:
    if not export_path:
        return None
    # Normalize Windows-style separators on POSIX if users pass e.g. "results\file.json"
    if "\\" in export_path and ":" not in export_path:
        export_path = export_path.replace("\\", "/")
    path = pathlib.Path(export_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        json.dump(_build_export_payload(result), f, indent=2)
    return path
