import asyncio

import pytest

from app.seed import gather_all


def test_gather_all_returns_results_in_submission_order():
    async def value(v, delay):
        await asyncio.sleep(delay)
        return v

    calls = [lambda: value(1, 0.02), lambda: value(2, 0.0), lambda: value(3, 0.01)]
    assert asyncio.run(gather_all(calls)) == [1, 2, 3]


def test_gather_all_waits_for_every_call_before_raising():
    finished = []

    async def fail(message, delay):
        await asyncio.sleep(delay)
        finished.append(message)
        raise RuntimeError(message)

    async def slow_ok():
        await asyncio.sleep(0.05)
        finished.append("ok")
        return "ok"

    calls = [lambda: fail("second", 0.01), slow_ok, lambda: fail("first-to-finish", 0.0)]
    with pytest.raises(RuntimeError, match="second"):
        asyncio.run(gather_all(calls))

    # The slow call settled even though others had already failed
    assert sorted(finished) == ["first-to-finish", "ok", "second"]


def test_gather_all_with_no_calls():
    assert asyncio.run(gather_all([])) == []
