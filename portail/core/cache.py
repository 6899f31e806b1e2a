"""Explicit read-through cache for small, rarely changing collections."""

from __future__ import annotations

import threading
from typing import Any, Callable, Generic, Optional, TypeVar

T = TypeVar("T")


class ListCache(Generic[T]):
    """Holds one cached listing until a mutating operation invalidates it.

    The application owns one instance per cached collection (see
    ``portail.extensions.init_caches``) and every service that writes to the
    collection calls :meth:`invalidate` after the write succeeds.
    """

    def __init__(self, name: str) -> None:
        """Initialize an empty cache."""
        self.name = name
        self._value: Optional[list[T]] = None
        self._generation = 0
        self._lock = threading.Lock()

    def get(self, loader: Callable[[], list[T]], force_refresh: bool = False) -> list[T]:
        """Return the cached listing, calling ``loader`` on a miss.

        A listing loaded while an invalidation happened is returned to the
        caller but not stored.
        """
        with self._lock:
            if self._value is not None and not force_refresh:
                return list(self._value)
            generation = self._generation
        value = loader()
        with self._lock:
            if self._generation == generation:
                self._value = list(value)
        return list(value)

    def invalidate(self) -> None:
        """Drop the cached listing."""
        with self._lock:
            self._value = None
            self._generation += 1

    @property
    def is_warm(self) -> bool:
        """Whether a listing is currently cached."""
        return self._value is not None

    def __repr__(self) -> str:
        state: Any = "warm" if self.is_warm else "cold"
        return f"<ListCache {self.name} ({state})>"
