import logging
import random
import time
from typing import Callable, Optional

logger = logging.getLogger("scraper.throttle")


class Throttle:
    """Politeness delays between sequential requests.

    The sleep and random functions are injectable so tests can record the
    requested pauses instead of waiting on them.
    """

    def __init__(
        self,
        sleep: Callable[[float], None] = time.sleep,
        uniform: Callable[[float, float], float] = random.uniform,
    ):
        self._sleep = sleep
        self._uniform = uniform

    def pause(self, seconds: float) -> None:
        """Suspend the current run for ``seconds``."""
        if seconds <= 0:
            return
        logger.debug("Sleeping %.2fs", seconds)
        self._sleep(seconds)

    def page_delay(
        self, page: int, base: float, jitter: float, progressive: float
    ) -> float:
        """Delay after ``page``; grows with depth to discourage sustained rates."""
        return base + self._uniform(0, jitter) + progressive * page

    def detail_delay(self, base: float, jitter: float) -> float:
        return base + self._uniform(0, jitter)


class Deadline:
    """Cooperative overall time limit for a run."""

    def __init__(
        self,
        seconds: Optional[float],
        clock: Callable[[], float] = time.monotonic,
    ):
        self._clock = clock
        self._expires_at = None if seconds is None else clock() + seconds

    @property
    def expired(self) -> bool:
        return self._expires_at is not None and self._clock() >= self._expires_at
