# cfpages/core/sequence.py

"""
Operators composed over the lazy entry sequences the paginator produces.

Every operator that stops before the source is exhausted closes it, so the
paginator never requests another page on its behalf.
"""

import asyncio
import logging
from typing import AsyncIterable, AsyncIterator, Awaitable, List, Optional, TypeVar

from ..errors import CardinalityError, EnumerationTimeout

logger = logging.getLogger(__name__)

T = TypeVar("T")

_MISSING = object()


async def _close(source: AsyncIterable) -> None:
    aclose = getattr(source, "aclose", None)
    if aclose is not None:
        await aclose()


async def single(source: AsyncIterable[T]) -> T:
    """
    Return the only entry of ``source``.

    Raises:
        CardinalityError: If the sequence is empty or holds more than one entry
    """
    entry = await _only_entry(source)
    if entry is _MISSING:
        raise CardinalityError("Expected exactly one entry, found none", count=0)
    return entry


async def single_or_none(source: AsyncIterable[T]) -> Optional[T]:
    """
    Return the only entry of ``source``, or None when it is empty.

    Raises:
        CardinalityError: If the sequence holds more than one entry
    """
    entry = await _only_entry(source)
    return None if entry is _MISSING else entry


async def _only_entry(source: AsyncIterable[T]):
    # _MISSING when empty; entries may themselves be None
    found: List[T] = []
    try:
        async for entry in source:
            found.append(entry)
            if len(found) > 1:
                raise CardinalityError("Expected at most one entry, found more than one", count=len(found))
    finally:
        await _close(source)
    return found[0] if found else _MISSING


async def first(source: AsyncIterable[T]) -> Optional[T]:
    """Return the first entry of ``source`` or None."""
    try:
        async for entry in source:
            return entry
    finally:
        await _close(source)
    return None


async def take(source: AsyncIterable[T], limit: int) -> AsyncIterator[T]:
    """Yield at most ``limit`` entries from ``source``."""
    if limit < 0:
        raise ValueError(f"limit must be non-negative, got {limit}")
    if limit == 0:
        await _close(source)
        return
    count = 0
    try:
        async for entry in source:
            yield entry
            count += 1
            if count >= limit:
                break
    finally:
        await _close(source)


async def collect(source: AsyncIterable[T]) -> List[T]:
    """Materialize every entry of ``source`` into a list."""
    try:
        return [entry async for entry in source]
    finally:
        await _close(source)


async def with_timeout(awaitable: Awaitable[T], seconds: Optional[float]) -> T:
    """
    Await ``awaitable`` with a deadline.

    On expiry the enumeration is cancelled at its current suspension point
    (the in-flight page fetch) and EnumerationTimeout is raised.
    """
    if seconds is None:
        return await awaitable
    try:
        return await asyncio.wait_for(awaitable, timeout=seconds)
    except asyncio.TimeoutError as e:
        logger.warning(f"Enumeration still pending after {seconds}s; cancelled")
        raise EnumerationTimeout(f"Enumeration did not complete within {seconds} seconds") from e
