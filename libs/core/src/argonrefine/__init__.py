
from .interfaces import HashBackend
from .registry import registry
from .errors import (
    ArgonRefineError,
    BackendUnavailableError,
    InvalidBackendError,
    InvalidConfigError,
    InvalidRequestRateError,
)
from .backends import Backend, load_adapters, normalize_backend, resolve_backend
from .policy import Classification, decide
from .metrics import BenchmarkSample, BenchmarkResult
from .config import RecommendationConfig
from .search import aggregate, run_search
from .recommender import ParameterRecommender

__all__ = [
    "HashBackend",
    "registry",
    "ArgonRefineError",
    "BackendUnavailableError",
    "InvalidBackendError",
    "InvalidConfigError",
    "InvalidRequestRateError",
    "Backend",
    "load_adapters",
    "normalize_backend",
    "resolve_backend",
    "Classification",
    "decide",
    "BenchmarkSample",
    "BenchmarkResult",
    "RecommendationConfig",
    "aggregate",
    "run_search",
    "ParameterRecommender",
]
