"""Log of alarm state changes with timestamps."""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass

from homealarm.date_and_time import RealTimeClock

EVENT_LOG_MAX_STORAGE = 20
EVENT_LOG_NAME_MAX_LENGTH = 13

_WATCHED_ELEMENTS = ("ALARM", "GAS_DET", "OVER_TEMP", "LED_IC", "LED_SB")


@dataclass(frozen=True)
class Event:
    """A state change: when it happened and what it was."""

    seconds: int
    name: str

    def __str__(self) -> str:
        return f"Event = {self.name}\r\nDate and Time = {time.ctime(self.seconds)}\n\r\n"


class EventLog:
    """Fixed-size ring of events, reporting each new one on the serial line.

    The count of stored events goes back to zero when the ring wraps, and
    new events then overwrite the oldest slots.
    """

    def __init__(
        self,
        clock: RealTimeClock | None = None,
        serial_write: Callable[[str], object] | None = None,
        max_storage: int = EVENT_LOG_MAX_STORAGE,
    ) -> None:
        if max_storage < 1:
            raise ValueError("event log needs room for at least one event")
        self.clock = clock if clock is not None else RealTimeClock()
        self._serial_write = serial_write if serial_write is not None else (lambda text: None)
        self._events: list[Event | None] = [None] * max_storage
        self._index = 0
        self._last_states = dict.fromkeys(_WATCHED_ELEMENTS, False)

    def __len__(self) -> int:
        return self._index

    def update(
        self,
        siren: bool,
        gas: bool,
        over_temp: bool,
        incorrect_code: bool,
        system_blocked: bool,
    ) -> list[Event]:
        """Record an event for every state that changed since the last update."""
        current = (siren, gas, over_temp, incorrect_code, system_blocked)
        written = []
        for name, state in zip(_WATCHED_ELEMENTS, current):
            state = bool(state)
            if state != self._last_states[name]:
                written.append(self.write(state, name))
            self._last_states[name] = state
        return written

    def write(self, state: bool, name: str) -> Event:
        """Store an event named ``name`` with an _ON or _OFF suffix."""
        event = Event(self.clock.now(), f"{name}_{'ON' if state else 'OFF'}")
        self._events[self._index] = event
        self._index = self._index + 1 if self._index < len(self._events) - 1 else 0
        self._serial_write(event.name)
        self._serial_write("\r\n")
        return event

    def event(self, index: int) -> Event:
        """The stored event in slot ``index``."""
        if not 0 <= index < len(self._events):
            raise IndexError(f"event index out of range: {index}")
        event = self._events[index]
        if event is None:
            raise IndexError(f"no event stored at index {index}")
        return event

    def read(self, index: int) -> str:
        """Text of the event in slot ``index`` as shown on the serial line."""
        return str(self.event(index))