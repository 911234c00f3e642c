"""Keypad, LEDs and character display of the alarm panel."""

from __future__ import annotations

from collections.abc import Callable

from homealarm.code import CODE_NUMBER_OF_KEYS, CodeOrigin
from homealarm.display import Display, DisplayConnection
from homealarm.fire_alarm import FireAlarm
from homealarm.hardware import OFF, SYSTEM_TIME_INCREMENT_MS, DigitalOut
from homealarm.matrix_keypad import MatrixKeypad

DISPLAY_REFRESH_TIME_MS = 3000
DISPLAY_COLUMNS = 20
DISPLAY_ROWS = 4


class UserInterface:
    """Collects codes from the keypad and shows the alarm status.

    ``screen`` mirrors the text last written to each line of the display.
    """

    def __init__(
        self,
        fire_alarm: FireAlarm,
        *,
        keypad: MatrixKeypad | None = None,
        display: Display | None = None,
        key_reader: Callable[[], str | None] | None = None,
        incorrect_code_led: DigitalOut | None = None,
        system_blocked_led: DigitalOut | None = None,
        time_increment_ms: int = SYSTEM_TIME_INCREMENT_MS,
    ) -> None:
        self.fire_alarm = fire_alarm
        self.code = fire_alarm.code
        self.keypad = keypad if keypad is not None else MatrixKeypad(time_increment_ms)
        self.display = (
            display
            if display is not None
            else Display(DisplayConnection.I2C_PCF8574_IO_EXPANDER)
        )
        self._read_key = key_reader if key_reader is not None else self.keypad.update
        self.incorrect_code_led = (
            incorrect_code_led if incorrect_code_led is not None else DigitalOut(OFF)
        )
        self.system_blocked_led = (
            system_blocked_led if system_blocked_led is not None else DigitalOut(OFF)
        )
        self.time_increment_ms = time_increment_ms
        self._screen = [" " * DISPLAY_COLUMNS for _ in range(DISPLAY_ROWS)]
        self._code_chars = 0
        self._hash_presses = 0
        self._show_temperature_state = False
        self._show_gas_state = False
        self._accumulated_display_ms = 0

    @property
    def screen(self) -> tuple[str, ...]:
        return tuple(self._screen)

    def init(self) -> None:
        """Prepare the panel and block until a new code is entered and confirmed with '#'."""
        self.incorrect_code_led.write(OFF)
        self.system_blocked_led.write(OFF)
        self.keypad.init()
        self._display_reset()
        self._show(0, 3, "Enter code: ___")

        new_code: list[str] = []
        while True:
            key = self._read_key()
            if key is not None and "0" <= key <= "9" and len(new_code) < CODE_NUMBER_OF_KEYS:
                self._show(11 + len(new_code), 3, key)
                new_code.append(key)
            if key == "#" and len(new_code) == CODE_NUMBER_OF_KEYS:
                break

        self.code.write(new_code)
        self._show(0, 3, "Code set.        ")
        self._display_labels()

    def update(self) -> None:
        """Run one cycle: read the keypad, refresh LEDs and the display."""
        self._keypad_update()
        self.incorrect_code_led.write(self.code.indicators.incorrect_code)
        self.system_blocked_led.write(self.code.indicators.system_blocked)
        self._display_update()

    def _keypad_update(self) -> None:
        key = self._read_key()
        if key is None:
            return

        indicators = self.code.indicators
        if self.fire_alarm.siren.active and not indicators.system_blocked:
            entry = self.code.entries[CodeOrigin.KEYPAD]
            if not indicators.incorrect_code:
                if self._code_chars == 0:
                    entry.keys.clear()
                entry.keys.append(key)
                self._code_chars += 1
                if self._code_chars >= CODE_NUMBER_OF_KEYS:
                    entry.complete = True
                    self._code_chars = 0
            elif key == "#":
                self._hash_presses += 1
                if self._hash_presses >= 2:
                    self._hash_presses = 0
                    self._code_chars = 0
                    entry.complete = False
                    indicators.incorrect_code = OFF
        elif key == "1":
            self._show_gas_state = True
        elif key == "9":
            self._show_temperature_state = True

    def _show(self, x: int, y: int, text: str) -> None:
        self.display.char_position_write(x, y)
        self.display.string_write(text)
        if 0 <= y < DISPLAY_ROWS and 0 <= x < DISPLAY_COLUMNS:
            line = self._screen[y]
            self._screen[y] = (line[:x] + text + line[x + len(text):])[:DISPLAY_COLUMNS]

    def _display_reset(self) -> None:
        self.display.init()
        self._screen = [" " * DISPLAY_COLUMNS for _ in range(DISPLAY_ROWS)]

    def _display_labels(self) -> None:
        self._display_reset()
        self._show(0, 0, "Temperature:")
        self._show(0, 1, "Gas:")
        self._show(0, 2, "Alarm:")

    def _display_update(self) -> None:
        if self._accumulated_display_ms < DISPLAY_REFRESH_TIME_MS:
            self._accumulated_display_ms += self.time_increment_ms
            return
        self._accumulated_display_ms = 0
        alarm = self.fire_alarm

        if self._show_temperature_state:
            state = "ON        " if alarm.over_temperature_detector_state else "OFF       "
            self._show(12, 0, state)
            self._show_temperature_state = False
        else:
            self._show(12, 0, f"{alarm.temperature_sensor.read_celsius():.0f}")
            self._show(14, 0, "'C")

        if self._show_gas_state:
            state = "ON               " if alarm.gas_detector_state else "OFF              "
            self._show(4, 1, state)
            self._show_gas_state = False
        else:
            self._show(4, 1, "Detected    " if alarm.gas_detected else "Not Detected")

        self._show(6, 2, "ON " if alarm.siren.active else "OFF")