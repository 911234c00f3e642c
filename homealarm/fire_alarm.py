"""Fire alarm: watches gas and temperature and drives the siren and strobe light."""

from __future__ import annotations

from homealarm.code import Code, CodeOrigin
from homealarm.gas_sensor import GasSensor
from homealarm.hardware import OFF, ON, DigitalIn, PinMode
from homealarm.siren import Siren
from homealarm.strobe_light import StrobeLight
from homealarm.temperature_sensor import TemperatureSensor

TEMPERATURE_C_LIMIT_ALARM = 50.0
STROBE_TIME_GAS = 1000
STROBE_TIME_OVER_TEMP = 500
STROBE_TIME_GAS_AND_OVER_TEMP = 100


class FireAlarm:
    """Raises the alarm on gas or over-temperature and clears it on a correct code.

    ``gas_detector_state`` and ``over_temperature_detector_state`` follow the
    sensors on every update, while ``gas_detected`` and
    ``over_temperature_detected`` stay latched until the alarm is deactivated.
    """

    def __init__(
        self,
        code: Code | None = None,
        temperature_sensor: TemperatureSensor | None = None,
        gas_sensor: GasSensor | None = None,
        siren: Siren | None = None,
        strobe_light: StrobeLight | None = None,
        test_button: DigitalIn | None = None,
    ) -> None:
        self.code = code if code is not None else Code()
        self.temperature_sensor = (
            temperature_sensor if temperature_sensor is not None else TemperatureSensor()
        )
        self.gas_sensor = gas_sensor if gas_sensor is not None else GasSensor()
        self.siren = siren if siren is not None else Siren()
        self.strobe_light = strobe_light if strobe_light is not None else StrobeLight()
        self.test_button = test_button if test_button is not None else DigitalIn(False)
        self.gas_detected = OFF
        self.over_temperature_detected = OFF
        self.gas_detector_state = OFF
        self.over_temperature_detector_state = OFF

    @property
    def alarm_active(self) -> bool:
        return self.siren.active

    def init(self) -> None:
        self.temperature_sensor.init()
        self.gas_sensor.init()
        self.siren.init()
        self.strobe_light.init()
        self.test_button.mode = PinMode.PULL_DOWN

    def update(self) -> None:
        """Run one cycle: detect, check for deactivation, drive the outputs."""
        self._activation_update()
        self._deactivation_update()
        self.siren.update(self.strobe_time())
        self.strobe_light.update(self.strobe_time())

    def strobe_time(self) -> int:
        """Toggle period in ms for the current alarm cause, or 0 when none."""
        if self.gas_detected and self.over_temperature_detected:
            return STROBE_TIME_GAS_AND_OVER_TEMP
        if self.gas_detected:
            return STROBE_TIME_GAS
        if self.over_temperature_detected:
            return STROBE_TIME_OVER_TEMP
        return 0

    def _raise_alarm(self) -> None:
        self.siren.active = ON
        self.strobe_light.active = ON

    def _activation_update(self) -> None:
        self.temperature_sensor.update()
        self.gas_sensor.update()

        self.over_temperature_detector_state = (
            self.temperature_sensor.read_celsius() > TEMPERATURE_C_LIMIT_ALARM
        )
        if self.over_temperature_detector_state:
            self.over_temperature_detected = ON
            self._raise_alarm()

        self.gas_detector_state = not self.gas_sensor.read()
        if self.gas_detector_state:
            self.gas_detected = ON
            self._raise_alarm()

        if self.test_button.read():
            self.over_temperature_detected = ON
            self.gas_detected = ON
            self._raise_alarm()

    def _deactivation_update(self) -> None:
        if self.siren.active and (
            self.code.match_from(CodeOrigin.KEYPAD)
            or self.code.match_from(CodeOrigin.PC_SERIAL)
        ):
            self._deactivate()

    def _deactivate(self) -> None:
        self.siren.active = OFF
        self.strobe_light.active = OFF
        self.over_temperature_detected = OFF
        self.gas_detected = OFF