"""Strobe light that flashes at a rate chosen by the fire alarm."""

from __future__ import annotations

from homealarm.hardware import OFF, SYSTEM_TIME_INCREMENT_MS, DigitalOut


class StrobeLight:
    """Strobe LED output driven by a periodic update."""

    def __init__(
        self,
        pin: DigitalOut | None = None,
        time_increment_ms: int = SYSTEM_TIME_INCREMENT_MS,
    ) -> None:
        self.pin = pin if pin is not None else DigitalOut(OFF)
        self.time_increment_ms = time_increment_ms
        self.active = OFF
        self._accumulated_ms = 0

    def init(self) -> None:
        self.pin.write(OFF)

    def update(self, strobe_time: int) -> None:
        """Advance one tick; toggle the light every ``strobe_time`` ms while active."""
        self._accumulated_ms += self.time_increment_ms
        if self.active:
            if self._accumulated_ms >= strobe_time:
                self._accumulated_ms = 0
                self.pin.toggle()
        else:
            self.pin.write(OFF)