"""Repository layer for nrf-desk.

Provides protocol interfaces and a resolve() helper that transparently
handles both sync (in-memory) and async (SQLAlchemy) store returns.
"""

from __future__ import annotations

import inspect
from typing import Awaitable, TypeVar

T = TypeVar("T")


async def resolve(value: T | Awaitable[T]) -> T:
    """Await a value if it is awaitable, otherwise return it directly.

    This lets services call store methods uniformly:
        user = await resolve(store.find_by_identifier(email))

    In-memory stores return plain values; SQLAlchemy repos return coroutines.
    """
    if inspect.isawaitable(value):
        return await value  # type: ignore[return-value]
    return value  # type: ignore[return-value]
