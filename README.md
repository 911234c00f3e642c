# homealarm

A smart home fire alarm running on simulated hardware. It samples a
temperature sensor and a gas sensor, drives a siren and a strobe light when
a hazard is detected, and lets the alarm be switched off with a three-key
code entered on a 4x4 matrix keypad or over a serial console. A 20x4
character display shows the temperature, gas and alarm state, and an event
log records every change of the alarm, the detectors and the indicator LEDs.

All hardware (digital and analog pins, the serial port, the I2C bus behind
the display) is modelled in software, so the whole system can be driven and
inspected from Python.

## Installation

```
pip install .
```

For the tests:

```
pip install ".[test]"
pytest
```

## The `homealarm` command

```
homealarm [--code CODE] [--input TEXT] [--cycles N] [--realtime]
```

The command builds a `SmartHomeSystem`, types `--code` (three digits,
default `180`) followed by `#` on the keypad to set the deactivation code at
start-up, queues the characters of `--input` on the serial line, runs
`--cycles` ticks (default 100) and then prints everything the system wrote to
the serial port: the command list shown at start-up, the answers to the
serial commands and the event log messages.

By default the ticks run back to back; with `--realtime` each tick waits
10 ms.

```
homealarm --input "123"
```

prints the command list followed by the alarm state, the gas detector state
and the over-temperature detector state.

## Using it from Python

```python
from homealarm.smart_home_system import SmartHomeSystem

keys = iter("180#")
system = SmartHomeSystem(key_reader=lambda: next(keys, None), sleep=lambda ms: None)
system.init()

system.fire_alarm.test_button.set(True)   # press the alarm test button
system.run(1)
system.fire_alarm.test_button.set(False)

system.serial.feed("4180")                # enter the code on the serial console
system.run(10)
print(system.serial.take_output())
print(system.fire_alarm.alarm_active)     # False
```

`SmartHomeSystem.run(cycles)` runs that many ticks (or forever when `cycles`
is `None`) and returns the number run. Each tick updates the user
interface, the fire alarm, the serial console and the event log, then sleeps
for the tick length.

## Modules

- `homealarm.hardware`: simulated `DigitalOut`, `DigitalIn` (fixed level or
  computed by a source callable), `AnalogIn` (0.0 to 1.0), `SerialPort`
  (`feed`, `readable`, `read`, `write`, `take_output`), `I2CBus`, which
  records every write, and `delay`.
- `homealarm.date_and_time`: `RealTimeClock`, read as a ctime string and set
  to a local date and time.
- `homealarm.code`: `Code`, the deactivation code (default `180`) and its
  checking, with `CodeOrigin`, `CodeEntry` and `AlarmIndicators`. Five
  incorrect codes set the system-blocked indicator; a correct code clears
  both indicators and the count.
- `homealarm.siren`, `homealarm.strobe_light`: `Siren` and `StrobeLight`,
  toggling their output at the period the fire alarm asks for while active.
- `homealarm.gas_sensor`: `GasSensor`, whose output goes low when gas is
  present.
- `homealarm.temperature_sensor`: `TemperatureSensor`, a ten-sample moving
  average of an LM35 reading, and `celsius_to_fahrenheit`.
- `homealarm.matrix_keypad`: `MatrixKeypad` with `KeypadState`, scanning
  with a 40 ms debounce and reporting a key when it is released; `press` and
  `release` operate keys on the simulated wiring.
- `homealarm.display`: `Display`, an HD44780-style 20x4 display wired by
  4-bit or 8-bit GPIO or through a PCF8574 I2C expander
  (`DisplayConnection`).
- `homealarm.event_log`: `EventLog`, a ring of 20 `Event`s. Each new event
  is also written to the serial line. When the ring wraps, the count of
  stored events goes back to zero and new events overwrite the oldest slots.
- `homealarm.fire_alarm`: `FireAlarm`, raising the alarm above 50 °C, on gas
  or on the test button, and clearing it on a correct code. The strobe
  period is 100 ms for gas and over-temperature together, 1000 ms for gas,
  500 ms for over-temperature.
- `homealarm.user_interface`: `UserInterface`, the keypad, the incorrect-code
  and system-blocked LEDs and the display, refreshed every 3 s. While the
  alarm is active, keys are collected as a code; after an incorrect code,
  `#` pressed twice allows a new attempt. While it is inactive, `1` and `9`
  show the live gas and over-temperature detector states at the next
  refresh.
- `homealarm.pc_serial_com`: `PcSerialCom` with `SerialMode`, the serial
  command console.
- `homealarm.smart_home_system`: `SmartHomeSystem` and `main`.

## Serial commands

| Key       | Action                                   |
|-----------|------------------------------------------|
| `1`       | alarm state                              |
| `2`       | gas detector state                       |
| `3`       | over-temperature detector state          |
| `4`       | enter the code to deactivate the alarm (only while it is active) |
| `5`       | enter a new code                         |
| `c` / `C` | temperature in Celsius                   |
| `f` / `F` | temperature in Fahrenheit (the line is labelled `° C`) |
| `s` / `S` | set date and time                        |
| `t` / `T` | show date and time                       |
| `e` / `E` | show stored events                       |

Any other key lists the commands. Codes are three characters long, echoed
as `*`.

## What it does not do

- It does not talk to real pins, a real serial port or a real I2C bus;
  every peripheral is an in-memory model.
- The `homealarm` command is not interactive: serial input is taken from
  `--input` before the run, and output is printed once the run is over. The
  `s` command reads its twelve digits straight from the serial input, so
  they must already be queued; if they run out, `SerialPort.read` raises
  `EOFError`.
- Events are kept in memory only and are lost when the program ends.