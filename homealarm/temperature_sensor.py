"""LM35 temperature sensor with a moving average over recent samples."""

from __future__ import annotations

from collections import deque

from homealarm.hardware import AnalogIn

LM35_NUMBER_OF_AVG_SAMPLES = 10
_ADC_REFERENCE_VOLTS = 3.3
_LM35_VOLTS_PER_DEGREE = 0.01


def celsius_to_fahrenheit(temp_c: float) -> float:
    return temp_c * 9.0 / 5.0 + 32.0


class TemperatureSensor:
    """Averages the last ten LM35 readings and converts them to degrees."""

    def __init__(self, analog: AnalogIn | None = None) -> None:
        self.analog = analog if analog is not None else AnalogIn()
        self._readings: deque[float] = deque(maxlen=LM35_NUMBER_OF_AVG_SAMPLES)
        self._celsius = 0.0
        self.init()

    def init(self) -> None:
        """Fill the averaging window with zeros."""
        self._readings.clear()
        self._readings.extend([0.0] * LM35_NUMBER_OF_AVG_SAMPLES)

    def update(self) -> None:
        """Take a sample and recompute the averaged temperature."""
        self._readings.append(self.analog.read())
        average = sum(self._readings) / LM35_NUMBER_OF_AVG_SAMPLES
        self._celsius = average * _ADC_REFERENCE_VOLTS / _LM35_VOLTS_PER_DEGREE

    def read_celsius(self) -> float:
        return self._celsius

    def read_fahrenheit(self) -> float:
        return celsius_to_fahrenheit(self._celsius)