"""
Concurrency helpers for per-item fan-out.
"""

import asyncio
from typing import Awaitable, Iterable, List, TypeVar

T = TypeVar("T")


async def gather_bounded(aws: Iterable[Awaitable[T]], limit: int = 0) -> List[T]:
    """
    Await all awaitables with at most ``limit`` running at once.

    Results keep the position of their input. A limit of 0 or less runs
    everything at once.
    """
    aws = list(aws)
    if limit <= 0 or limit >= len(aws):
        return await asyncio.gather(*aws)

    semaphore = asyncio.Semaphore(limit)

    async def _run(aw: Awaitable[T]) -> T:
        async with semaphore:
            return await aw

    return await asyncio.gather(*(_run(aw) for aw in aws))
