import asyncio

import pytest
from selenium.common.exceptions import InvalidSessionIdException

from goalflow.connectors.helpers.readiness import wait_until_ready


def test_ready_after_n_polls_sleeps_n_minus_one_times(clock, sleep):
    answers = iter([False, False, False, True])

    ready = asyncio.run(wait_until_ready(lambda: next(answers), interval=3, sleep=sleep, clock=clock))

    assert ready
    assert sleep.calls == [3, 3, 3]


def test_bounded_wait_gives_up_after_timeout(clock, sleep):
    ready = asyncio.run(wait_until_ready(lambda: False, interval=3, timeout=10, sleep=sleep, clock=clock))

    assert not ready
    assert clock.now >= 10
    assert sleep.calls == [3, 3, 3, 3]


def test_unbounded_wait_is_cancellable():
    async def scenario():
        with pytest.raises(asyncio.TimeoutError):
            await asyncio.wait_for(wait_until_ready(lambda: False, interval=0.01), timeout=0.05)

    asyncio.run(scenario())


def test_probe_errors_count_as_not_ready(clock, sleep):
    calls = []

    def probe():
        calls.append(1)
        if len(calls) == 1:
            raise RuntimeError("stale element")
        return True

    assert asyncio.run(wait_until_ready(probe, interval=1, sleep=sleep, clock=clock))
    assert sleep.calls == [1]


def test_lost_session_propagates(clock, sleep):
    def probe():
        raise InvalidSessionIdException("gone")

    with pytest.raises(InvalidSessionIdException):
        asyncio.run(wait_until_ready(probe, interval=1, sleep=sleep, clock=clock))


def test_on_wait_reports_each_attempt(clock, sleep):
    answers = iter([False, False, True])
    seen = []

    async def on_wait(attempt):
        seen.append(attempt)

    asyncio.run(wait_until_ready(lambda: next(answers), interval=2, sleep=sleep, clock=clock, on_wait=on_wait))
    assert seen == [1, 2]
