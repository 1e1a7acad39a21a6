import asyncio

from gif_pipeline.utils.concurrency import gather_bounded


async def test_results_keep_input_order():
    async def delayed(value, delay):
        await asyncio.sleep(delay)
        return value

    results = await gather_bounded([delayed("a", 0.03), delayed("b", 0.0), delayed("c", 0.01)], limit=2)

    assert results == ["a", "b", "c"]


async def test_limit_caps_running_tasks():
    running = 0
    peak = 0

    async def task(value):
        nonlocal running, peak
        running += 1
        peak = max(peak, running)
        await asyncio.sleep(0.01)
        running -= 1
        return value

    results = await gather_bounded((task(i) for i in range(8)), limit=3)

    assert results == list(range(8))
    assert peak <= 3


async def test_zero_limit_is_unbounded():
    running = 0
    peak = 0

    async def task():
        nonlocal running, peak
        running += 1
        peak = max(peak, running)
        await asyncio.sleep(0.01)
        running -= 1

    await gather_bounded([task() for _ in range(5)], limit=0)

    assert peak == 5


async def test_empty_input():
    assert await gather_bounded([], limit=4) == []
