"""Explicit filter chains used as extensibility points.

A chain is owned by whoever composes the engine; callers register callbacks
on it at startup instead of relying on a process-wide registry.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Generic, List, TypeVar

LOGGER = logging.getLogger(__name__)

T = TypeVar("T")


class FilterChain(Generic[T]):
    """Ordered list of ``value -> value`` callbacks."""

    def __init__(self, name: str) -> None:
        self.name = name
        self._callbacks: List[Callable[[Any], Any]] = []

    def add(self, callback: Callable[[Any], Any]) -> None:
        """Register a callback; it runs after those already registered."""

        self._callbacks.append(callback)
        LOGGER.debug("Registered %s filter %r", self.name, callback)

    def apply(self, value: Any) -> Any:
        """Thread ``value`` through every callback in registration order."""

        for callback in self._callbacks:
            value = callback(value)
        return value

    def __len__(self) -> int:
        return len(self._callbacks)
