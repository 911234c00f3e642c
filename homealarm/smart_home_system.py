"""The whole alarm panel: wires the subsystems together and runs the main loop."""

from __future__ import annotations

import argparse
import itertools
import sys
from collections.abc import Callable

from homealarm.code import CODE_NUMBER_OF_KEYS, Code
from homealarm.date_and_time import RealTimeClock
from homealarm.display import Display, DisplayConnection
from homealarm.event_log import EventLog
from homealarm.fire_alarm import FireAlarm
from homealarm.gas_sensor import GasSensor
from homealarm.hardware import SYSTEM_TIME_INCREMENT_MS, DigitalIn, SerialPort, delay
from homealarm.matrix_keypad import MatrixKeypad
from homealarm.pc_serial_com import PcSerialCom
from homealarm.siren import Siren
from homealarm.strobe_light import StrobeLight
from homealarm.temperature_sensor import TemperatureSensor
from homealarm.user_interface import UserInterface


class SmartHomeSystem:
    """Fire alarm, panel, serial interface and event log updated every tick."""

    def __init__(
        self,
        *,
        serial: SerialPort | None = None,
        clock: RealTimeClock | None = None,
        keypad: MatrixKeypad | None = None,
        key_reader: Callable[[], str | None] | None = None,
        display: Display | None = None,
        temperature_sensor: TemperatureSensor | None = None,
        gas_sensor: GasSensor | None = None,
        test_button: DigitalIn | None = None,
        sleep: Callable[[float], object] = delay,
        time_increment_ms: int = SYSTEM_TIME_INCREMENT_MS,
    ) -> None:
        self.serial = serial if serial is not None else SerialPort()
        self.clock = clock if clock is not None else RealTimeClock()
        self.time_increment_ms = time_increment_ms
        self._sleep = sleep
        self.code = Code(serial_write=self.serial.write)
        self.fire_alarm = FireAlarm(
            code=self.code,
            temperature_sensor=temperature_sensor,
            gas_sensor=gas_sensor,
            siren=Siren(time_increment_ms=time_increment_ms),
            strobe_light=StrobeLight(time_increment_ms=time_increment_ms),
            test_button=test_button,
        )
        self.event_log = EventLog(self.clock, serial_write=self.serial.write)
        self.pc_serial_com = PcSerialCom(
            self.fire_alarm, serial=self.serial, clock=self.clock, event_log=self.event_log
        )
        self.user_interface = UserInterface(
            self.fire_alarm,
            keypad=keypad,
            display=(
                display
                if display is not None
                else Display(DisplayConnection.I2C_PCF8574_IO_EXPANDER, sleep=sleep)
            ),
            key_reader=key_reader,
            time_increment_ms=time_increment_ms,
        )

    def init(self) -> None:
        self.fire_alarm.init()
        self.pc_serial_com.init()
        self.user_interface.init()

    def update(self) -> None:
        """Run one tick of every subsystem, then wait for the next tick."""
        self.user_interface.update()
        self.fire_alarm.update()
        self.pc_serial_com.update()
        indicators = self.code.indicators
        self.event_log.update(
            self.fire_alarm.siren.active,
            self.fire_alarm.gas_detector_state,
            self.fire_alarm.over_temperature_detector_state,
            indicators.incorrect_code,
            indicators.system_blocked,
        )
        self._sleep(self.time_increment_ms)

    def run(self, cycles: int | None = None) -> int:
        """Update ``cycles`` times, or forever when None; return the ticks run."""
        if cycles is not None and cycles < 0:
            raise ValueError("number of cycles must not be negative")
        ticks = itertools.count() if cycles is None else range(cycles)
        done = 0
        for _ in ticks:
            self.update()
            done += 1
        return done


def _no_sleep(ms: float) -> None:
    return None


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="homealarm",
        description="Run the home alarm on simulated hardware and print its serial output.",
    )
    parser.add_argument(
        "--code", default="180", help="deactivation code typed on the keypad at start-up"
    )
    parser.add_argument(
        "--input", default="", help="characters received on the serial line"
    )
    parser.add_argument("--cycles", type=int, default=100, help="number of ticks to run")
    parser.add_argument(
        "--realtime", action="store_true", help="wait for real time between ticks"
    )
    args = parser.parse_args(argv)

    if len(args.code) != CODE_NUMBER_OF_KEYS or not args.code.isdigit():
        parser.error(f"code must be {CODE_NUMBER_OF_KEYS} digits")
    if args.cycles < 0:
        parser.error("cycles must not be negative")

    keys = iter([*args.code, "#"])
    system = SmartHomeSystem(
        key_reader=lambda: next(keys, None),
        sleep=delay if args.realtime else _no_sleep,
    )
    system.init()
    system.serial.feed(args.input)
    system.run(args.cycles)
    sys.stdout.write(system.serial.take_output())
    return 0


if __name__ == "__main__":
    sys.exit(main())