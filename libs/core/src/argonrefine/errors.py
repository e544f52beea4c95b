from __future__ import annotations

"""Exception types raised by the recommender and its backends."""


class ArgonRefineError(Exception):
    pass


class InvalidBackendError(ArgonRefineError, ValueError):
    """Raised when a backend selector is not one of the known names or aliases."""

    def __init__(self, backend: str) -> None:
        super().__init__(f"Invalid backend: {backend}")
        self.backend = backend


class InvalidRequestRateError(ArgonRefineError, ValueError):
    pass


class InvalidConfigError(ArgonRefineError, ValueError):
    pass


class BackendUnavailableError(ArgonRefineError, RuntimeError):
    pass
