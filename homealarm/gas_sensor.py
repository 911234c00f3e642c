"""MQ-2 gas sensor read through its digital output."""

from __future__ import annotations

from homealarm.hardware import DigitalIn


class GasSensor:
    """Digital gas sensor; the output goes low when gas is present."""

    def __init__(self, pin: DigitalIn | None = None) -> None:
        self.pin = pin if pin is not None else DigitalIn(True)
        self._level = self.pin.read()

    def init(self) -> None:
        """Take an initial sample of the sensor output."""
        self._level = self.pin.read()

    def update(self) -> None:
        """Sample the sensor output."""
        self._level = self.pin.read()

    def read(self) -> bool:
        """Level of the sensor output at the last sample (low means gas)."""
        return self._level