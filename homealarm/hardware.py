"""Simulated board peripherals: digital and analog pins, a serial port and an I2C bus."""

from __future__ import annotations

import time
from collections import deque
from collections.abc import Callable, Iterable
from enum import Enum

ON = True
OFF = False

SYSTEM_TIME_INCREMENT_MS = 10


class PinMode(Enum):
    """Input pin bias configuration."""

    PULL_NONE = "PullNone"
    PULL_UP = "PullUp"
    PULL_DOWN = "PullDown"


class DigitalOut:
    """A digital output pin holding its last written level."""

    def __init__(self, value: bool = False) -> None:
        self._value = bool(value)

    def write(self, value: object) -> None:
        self._value = bool(value)

    def read(self) -> bool:
        return self._value

    def toggle(self) -> bool:
        """Invert the output level and return the new level."""
        self._value = not self._value
        return self._value

    def __bool__(self) -> bool:
        return self._value


class DigitalIn:
    """A digital input pin.

    The level is either set explicitly or computed by a ``source`` callable,
    which lets a pin reflect other simulated wiring.
    """

    def __init__(
        self,
        value: bool = False,
        source: Callable[[], object] | None = None,
        mode: PinMode = PinMode.PULL_NONE,
    ) -> None:
        self._value = bool(value)
        self._source = source
        self.mode = mode

    def read(self) -> bool:
        if self._source is not None:
            return bool(self._source())
        return self._value

    def set(self, value: object) -> None:
        """Drive the pin to a fixed level, detaching any source."""
        self._source = None
        self._value = bool(value)

    def __bool__(self) -> bool:
        return self.read()


class AnalogIn:
    """An analog input returning a normalised reading between 0.0 and 1.0."""

    def __init__(self, value: float = 0.0) -> None:
        self._value = 0.0
        self.set(value)

    def read(self) -> float:
        return self._value

    def set(self, value: float) -> None:
        value = float(value)
        if not 0.0 <= value <= 1.0:
            raise ValueError(f"analog reading must be within 0.0 and 1.0, got {value}")
        self._value = value


class SerialPort:
    """A character serial port with an input queue and an output buffer."""

    def __init__(self, baud_rate: int = 115200) -> None:
        self.baud_rate = baud_rate
        self._incoming: deque[str] = deque()
        self._outgoing: list[str] = []

    def feed(self, data: Iterable[str]) -> None:
        """Queue characters as if they had arrived on the line."""
        self._incoming.extend(data)

    def readable(self) -> bool:
        return bool(self._incoming)

    def read(self) -> str:
        """Return the next received character."""
        if not self._incoming:
            raise EOFError("no data waiting on the serial port")
        return self._incoming.popleft()

    def write(self, text: str) -> int:
        self._outgoing.append(text)
        return len(text)

    def take_output(self) -> str:
        """Return everything written so far and clear the buffer."""
        output = "".join(self._outgoing)
        self._outgoing.clear()
        return output


class I2CBus:
    """An I2C master that records every write transaction."""

    def __init__(self, frequency: int = 100_000) -> None:
        self.frequency = frequency
        self.transactions: list[tuple[int, bytes]] = []

    def write(self, address: int, data: int | Iterable[int]) -> int:
        """Record a write of ``data`` to ``address``; returns 0 on success."""
        if not 0 <= address <= 0xFF:
            raise ValueError(f"I2C address out of range: {address}")
        payload = bytes([data]) if isinstance(data, int) else bytes(data)
        self.transactions.append((address, payload))
        return 0


def delay(ms: float) -> None:
    """Block for ``ms`` milliseconds."""
    if ms < 0:
        raise ValueError("delay must not be negative")
    time.sleep(ms / 1000)