"""Command interface of the alarm on the PC serial line."""

from __future__ import annotations

import re
from enum import Enum, auto

from homealarm.code import CODE_NUMBER_OF_KEYS, CodeOrigin
from homealarm.date_and_time import RealTimeClock
from homealarm.event_log import EventLog
from homealarm.fire_alarm import FireAlarm
from homealarm.hardware import SerialPort

_AVAILABLE_COMMANDS = (
    "Available commands:\r\n",
    "Press '1' to get the alarm state\r\n",
    "Press '2' to get the gas detector state\r\n",
    "Press '3' to get the over temperature detector state\r\n",
    "Press '4' to enter the code to deactivate the alarm\r\n",
    "Press '5' to enter a new code to deactivate the alarm\r\n",
    "Press 'f' or 'F' to get lm35 reading in Fahrenheit\r\n",
    "Press 'c' or 'C' to get lm35 reading in Celsius\r\n",
    "Press 's' or 'S' to set the date and time\r\n",
    "Press 't' or 'T' to get the date and time\r\n",
    "Press 'e' or 'E' to get the stored events\r\n",
    "\r\n",
)

_LEADING_INTEGER = re.compile(r"\s*([+-]?\d+)")


def _atoi(text: str) -> int:
    """Value of the leading integer in ``text``, or 0 when there is none."""
    match = _LEADING_INTEGER.match(text)
    return int(match.group(1)) if match else 0


class SerialMode(Enum):
    """What the next received character is taken as."""

    COMMANDS = auto()
    GET_CODE = auto()
    SAVE_NEW_CODE = auto()


class PcSerialCom:
    """Reads single-character commands from the serial line and answers them."""

    def __init__(
        self,
        fire_alarm: FireAlarm,
        *,
        serial: SerialPort | None = None,
        clock: RealTimeClock | None = None,
        event_log: EventLog | None = None,
    ) -> None:
        self.fire_alarm = fire_alarm
        self.code = fire_alarm.code
        self.serial = serial if serial is not None else SerialPort()
        self.clock = clock if clock is not None else RealTimeClock()
        self.event_log = (
            event_log
            if event_log is not None
            else EventLog(self.clock, serial_write=self.string_write)
        )
        self.mode = SerialMode.COMMANDS
        self._code_chars = 0
        self._new_code: list[str] = []
        self._commands = {
            "1": self._show_alarm_state,
            "2": self._show_gas_detector_state,
            "3": self._show_over_temperature_detector_state,
            "4": self._enter_code_sequence,
            "5": self._enter_new_code,
            "c": self._show_temperature_celsius,
            "f": self._show_temperature_fahrenheit,
            "s": self._set_date_and_time,
            "t": self._show_date_and_time,
            "e": self._show_stored_events,
        }

    @property
    def code_complete(self) -> bool:
        return self.code.entries[CodeOrigin.PC_SERIAL].complete

    def init(self) -> None:
        self._available_commands()

    def char_read(self) -> str | None:
        """The next received character, or None when nothing is waiting."""
        if self.serial.readable():
            char = self.serial.read()
            return None if char == "\0" else char
        return None

    def string_write(self, text: str) -> None:
        self.serial.write(text)

    def update(self) -> None:
        """Handle at most one received character."""
        char = self.char_read()
        if char is None:
            return
        if self.mode is SerialMode.COMMANDS:
            self._command_update(char)
        elif self.mode is SerialMode.GET_CODE:
            self._get_code_update(char)
        elif self.mode is SerialMode.SAVE_NEW_CODE:
            self._save_new_code_update(char)
        else:
            self.mode = SerialMode.COMMANDS

    def _string_read(self, length: int) -> str:
        chars = []
        for _ in range(length):
            char = self.serial.read()
            self.serial.write(char)
            chars.append(char)
        return "".join(chars)

    def _get_code_update(self, char: str) -> None:
        entry = self.code.entries[CodeOrigin.PC_SERIAL]
        entry.keys.append(char)
        self.string_write("*")
        self._code_chars += 1
        if self._code_chars >= CODE_NUMBER_OF_KEYS:
            self.mode = SerialMode.COMMANDS
            entry.complete = True
            self._code_chars = 0

    def _save_new_code_update(self, char: str) -> None:
        self._new_code.append(char)
        self.string_write("*")
        self._code_chars += 1
        if self._code_chars >= CODE_NUMBER_OF_KEYS:
            self.mode = SerialMode.COMMANDS
            self._code_chars = 0
            self.code.write(self._new_code)
            self._new_code = []
            self.string_write("\r\nNew code configured\r\n\r\n")

    def _command_update(self, char: str) -> None:
        command = self._commands.get(char.lower(), self._available_commands)
        command()

    def _available_commands(self) -> None:
        for line in _AVAILABLE_COMMANDS:
            self.string_write(line)

    def _show_alarm_state(self) -> None:
        if self.fire_alarm.siren.active:
            self.string_write("The alarm is activated\r\n")
        else:
            self.string_write("The alarm is not activated\r\n")

    def _show_gas_detector_state(self) -> None:
        if self.fire_alarm.gas_detector_state:
            self.string_write("Gas is being detected\r\n")
        else:
            self.string_write("Gas is not being detected\r\n")

    def _show_over_temperature_detector_state(self) -> None:
        if self.fire_alarm.over_temperature_detector_state:
            self.string_write("Temperature is above the maximum level\r\n")
        else:
            self.string_write("Temperature is below the maximum level\r\n")

    def _enter_code_sequence(self) -> None:
        if self.fire_alarm.siren.active:
            self.string_write("Please enter the four digits numeric code ")
            self.string_write("to deactivate the alarm: ")
            self.mode = SerialMode.GET_CODE
            self.code.entries[CodeOrigin.PC_SERIAL].clear()
            self._code_chars = 0
        else:
            self.string_write("Alarm is not activated.\r\n")

    def _enter_new_code(self) -> None:
        self.string_write("Please enter the new four digits numeric code ")
        self.string_write("to deactivate the alarm: ")
        self._code_chars = 0
        self._new_code = []
        self.mode = SerialMode.SAVE_NEW_CODE

    def _show_temperature_celsius(self) -> None:
        celsius = self.fire_alarm.temperature_sensor.read_celsius()
        self.string_write(f"Temperature: {celsius:.2f} \xb0 C\r\n")

    def _show_temperature_fahrenheit(self) -> None:
        fahrenheit = self.fire_alarm.temperature_sensor.read_fahrenheit()
        self.string_write(f"Temperature: {fahrenheit:.2f} \xb0 C\r\n")

    def _set_date_and_time(self) -> None:
        prompts = (
            ("\r\nType four digits for the current year (YYYY): ", 4),
            ("Type two digits for the current month (01-12): ", 2),
            ("Type two digits for the current day (01-31): ", 2),
            ("Type two digits for the current hour (00-23): ", 2),
            ("Type two digits for the current minutes (00-59): ", 2),
            ("Type two digits for the current seconds (00-59): ", 2),
        )
        fields = []
        for prompt, length in prompts:
            self.string_write(prompt)
            fields.append(self._string_read(length))
            self.string_write("\r\n")
        self.string_write("Date and time has been set\r\n")
        year, month, day, hour, minute, second = (_atoi(field) for field in fields)
        self.clock.write(year, month, day, hour, minute, second)

    def _show_date_and_time(self) -> None:
        self.string_write(f"Date and Time = {self.clock.read()}")
        self.string_write("\r\n")

    def _show_stored_events(self) -> None:
        for index in range(len(self.event_log)):
            self.string_write(self.event_log.read(index))
            self.string_write("\r\n")