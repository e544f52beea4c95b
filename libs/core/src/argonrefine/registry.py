from __future__ import annotations
from typing import Callable, Dict, Type, TypeVar

T = TypeVar("T", bound=type)


class _BackendRegistry:
    """Backend name -> strategy class. Adapters register on import."""

    def __init__(self) -> None:
        self._items: Dict[str, Type] = {}

    def register(self, name: str) -> Callable[[T], T]:
        def _inner(cls: T) -> T:
            self._items[name] = cls
            return cls
        return _inner

    def get(self, name: str) -> Type:
        return self._items[name]

    def has(self, name: str) -> bool:
        return name in self._items

    def list(self) -> Dict[str, Type]:
        return dict(self._items)


registry = _BackendRegistry()
