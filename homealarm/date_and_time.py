"""Real-time clock that can be read as a ctime string and set to a calendar date."""

from __future__ import annotations

import time
from collections.abc import Callable


class RealTimeClock:
    """A settable clock kept as an offset from an underlying time source."""

    def __init__(self, clock: Callable[[], float] = time.time) -> None:
        self._clock = clock
        self._offset = 0.0

    def now(self) -> int:
        """Current time in whole seconds since the epoch."""
        return int(self._clock() + self._offset)

    def read(self) -> str:
        """Current local time in ctime form, newline included."""
        return time.ctime(self.now()) + "\n"

    def write(
        self, year: int, month: int, day: int, hour: int, minute: int, second: int
    ) -> None:
        """Set the clock to the given local date and time."""
        target = time.mktime((year, month, day, hour, minute, second, 0, 0, -1))
        self._offset = target - self._clock()