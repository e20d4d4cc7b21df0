"""Stale-response guard for overlapping async loads."""

from collections.abc import Awaitable
from typing import TypeVar

T = TypeVar("T")


class LatestOnly:
    """Tracks which of several in-flight loads is the most recent.

    Each call to :meth:`run` supersedes the ones started before it. A result
    that arrives after a newer load was started, or after :meth:`cancel`,
    is reported as stale so the caller can drop it.
    """

    def __init__(self) -> None:
        self._generation = 0

    @property
    def generation(self) -> int:
        return self._generation

    def begin(self) -> int:
        self._generation += 1
        return self._generation

    def is_current(self, ticket: int) -> bool:
        return ticket == self._generation

    def cancel(self) -> None:
        """Invalidate every load currently in flight."""
        self._generation += 1

    async def run(self, awaitable: Awaitable[T]) -> tuple[T, bool]:
        """Await ``awaitable`` and return ``(result, is_current)``."""
        ticket = self.begin()
        result = await awaitable
        return result, self.is_current(ticket)
