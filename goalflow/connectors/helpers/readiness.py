"""
Cooperative readiness polling.
A probe is checked on a fixed interval until it reports ready. A bounded
wait gives up after ``timeout`` seconds and lets the workflow proceed; an
unbounded wait (``timeout=None``) keeps polling until the page is ready or
the task is cancelled, so a human can log in or solve a CAPTCHA.
"""

import asyncio
import logging
import time
from typing import Awaitable, Callable, Optional

from goalflow.connectors.helpers.selenium_helpers import SESSION_LOST_ERRORS

logger = logging.getLogger(__name__)

Probe = Callable[[], bool]
Sleep = Callable[[float], Awaitable[None]]
Clock = Callable[[], float]


def _probe_once(probe: Probe) -> bool:
    try:
        return bool(probe())
    except SESSION_LOST_ERRORS:
        raise
    except Exception as e:
        logger.debug(f"Readiness probe error treated as not ready: {e}")
        return False


async def wait_until_ready(
    probe: Probe,
    *,
    interval: float,
    timeout: Optional[float] = None,
    sleep: Sleep = asyncio.sleep,
    clock: Clock = time.monotonic,
    on_wait: Optional[Callable[[int], Awaitable[None]]] = None,
) -> bool:
    """
    Poll ``probe`` every ``interval`` seconds.

    Returns True as soon as the probe is truthy, False when a bounded wait
    runs out. A lost browser session propagates; any other probe error
    counts as "not ready yet".
    """
    deadline = None if timeout is None else clock() + timeout
    attempt = 0
    while True:
        if _probe_once(probe):
            return True
        attempt += 1
        if deadline is not None and clock() >= deadline:
            return False
        if on_wait is not None:
            await on_wait(attempt)
        await sleep(interval)
