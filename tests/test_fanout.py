"""Bounded fan-out with per-item isolation."""

import asyncio
import logging

import pytest

from strength_analytics.services.fanout import gather_isolated, successes


class TestGatherIsolated:
    @pytest.mark.asyncio
    async def test_keeps_input_order(self):
        async def double(n):
            await asyncio.sleep(0.01 * (5 - n))
            return n * 2

        outcomes = await gather_isolated([1, 2, 3, 4], double, limit=4)
        assert [o.value for o in outcomes] == [2, 4, 6, 8]
        assert all(o.ok for o in outcomes)

    @pytest.mark.asyncio
    async def test_failure_is_isolated(self):
        async def maybe_fail(n):
            if n == 2:
                raise ValueError("boom")
            return n

        outcomes = await gather_isolated([1, 2, 3], maybe_fail)
        assert [o.ok for o in outcomes] == [True, False, True]
        assert isinstance(outcomes[1].error, ValueError)
        assert successes(outcomes) == [1, 3]

    @pytest.mark.asyncio
    async def test_timeout_is_isolated(self):
        async def slow(n):
            await asyncio.sleep(1.0 if n == "slow" else 0)
            return n

        outcomes = await gather_isolated(["a", "slow", "b"], slow, timeout=0.05)
        assert successes(outcomes) == ["a", "b"]
        assert isinstance(outcomes[1].error, asyncio.TimeoutError)

    @pytest.mark.asyncio
    async def test_concurrency_is_bounded(self):
        running = 0
        peak = 0

        async def track(_):
            nonlocal running, peak
            running += 1
            peak = max(peak, running)
            await asyncio.sleep(0.01)
            running -= 1

        await gather_isolated(range(10), track, limit=3)
        assert peak == 3

    @pytest.mark.asyncio
    async def test_empty_input(self):
        assert await gather_isolated([], lambda n: n) == []


def test_successes_logs_failures(caplog):
    from strength_analytics.services.fanout import TaskOutcome

    outcomes = [TaskOutcome(item="x", value=1), TaskOutcome(item="y", error=RuntimeError("down"))]
    with caplog.at_level(logging.WARNING, logger="strength_analytics.services.fanout"):
        assert successes(outcomes, "Friend stats fetch") == [1]
    assert "Friend stats fetch failed for y" in caplog.text
