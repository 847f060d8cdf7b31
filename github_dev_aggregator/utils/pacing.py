"""Fixed-interval pacing of deliberate pauses between upstream calls.

Every deliberate delay in the aggregation pipeline (between search pages,
between bulk-enriched accounts, and the stagger of per-repository language
lookups) goes through a pacer. The sleep function is injectable so pacing can
be asserted in tests without waiting on the wall clock.
"""

import asyncio
from typing import Awaitable, Callable

import structlog

logger = structlog.get_logger(__name__)

SleepFunc = Callable[[float], Awaitable[None]]


class FixedIntervalPacer:
    """Pause for a fixed interval between consecutive upstream calls."""

    def __init__(self, interval: float, sleep: SleepFunc = asyncio.sleep, name: str = "pacer") -> None:
        """Initialize the pacer.

        Args:
            interval: Seconds to pause per step (0 disables pacing)
            sleep: Coroutine function used to pause (default: asyncio.sleep)
            name: Label used in log events
        """
        if interval < 0:
            raise ValueError(f"Pacing interval must not be negative, got {interval}")
        self.interval = interval
        self.name = name
        self._sleep = sleep

    async def pause(self) -> None:
        """Pause for one interval."""
        await self._wait(self.interval)

    async def stagger(self, index: int) -> None:
        """Pause for ``index`` intervals, so the n-th of a batch starts n intervals after the first."""
        await self._wait(self.interval * index)

    async def _wait(self, seconds: float) -> None:
        if seconds <= 0:
            return
        logger.debug("Pacing upstream calls", pacer=self.name, wait_seconds=seconds)
        await self._sleep(seconds)
