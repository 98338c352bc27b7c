"""
Randomized pause between listings to stay clear of throttling and bot detection.
"""
import asyncio
import random
from typing import Awaitable, Callable, Optional


class RateLimiter:
    """Sleeps a uniformly random whole number of milliseconds between items."""

    def __init__(
        self,
        min_ms: int = 1_000,
        max_ms: int = 3_000,
        rng: Optional[random.Random] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        if not 0 <= min_ms <= max_ms:
            raise ValueError(f"Invalid delay range: [{min_ms}, {max_ms}]")
        self.min_ms = min_ms
        self.max_ms = max_ms
        self._rng = rng or random.Random()
        self._sleep = sleep

    @classmethod
    def from_config(cls, config) -> "RateLimiter":
        return cls(config.min_delay_ms, config.max_delay_ms)

    def draw_delay_ms(self) -> int:
        return self._rng.randint(self.min_ms, self.max_ms)

    async def pause_after(self, index: int, total: int) -> int:
        """Pause after item ``index`` of ``total``; never after the last one."""
        if index >= total - 1:
            return 0
        delay_ms = self.draw_delay_ms()
        await self._sleep(delay_ms / 1000)
        return delay_ms
