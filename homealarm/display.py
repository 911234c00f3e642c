"""HD44780-compatible 20x4 character display over GPIO or a PCF8574 I2C expander."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from enum import Enum, IntEnum, auto

from homealarm.hardware import OFF, ON, DigitalOut, I2CBus, delay

DISPLAY_IR_CLEAR_DISPLAY = 0b00000001
DISPLAY_IR_ENTRY_MODE_SET = 0b00000100
DISPLAY_IR_DISPLAY_CONTROL = 0b00001000
DISPLAY_IR_FUNCTION_SET = 0b00100000
DISPLAY_IR_SET_DDRAM_ADDR = 0b10000000

DISPLAY_IR_ENTRY_MODE_SET_INCREMENT = 0b00000010
DISPLAY_IR_ENTRY_MODE_SET_DECREMENT = 0b00000000
DISPLAY_IR_ENTRY_MODE_SET_SHIFT = 0b00000001
DISPLAY_IR_ENTRY_MODE_SET_NO_SHIFT = 0b00000000

DISPLAY_IR_DISPLAY_CONTROL_DISPLAY_ON = 0b00000100
DISPLAY_IR_DISPLAY_CONTROL_DISPLAY_OFF = 0b00000000
DISPLAY_IR_DISPLAY_CONTROL_CURSOR_ON = 0b00000010
DISPLAY_IR_DISPLAY_CONTROL_CURSOR_OFF = 0b00000000
DISPLAY_IR_DISPLAY_CONTROL_BLINK_ON = 0b00000001
DISPLAY_IR_DISPLAY_CONTROL_BLINK_OFF = 0b00000000

DISPLAY_IR_FUNCTION_SET_8BITS = 0b00010000
DISPLAY_IR_FUNCTION_SET_4BITS = 0b00000000
DISPLAY_IR_FUNCTION_SET_2LINES = 0b00001000
DISPLAY_IR_FUNCTION_SET_1LINE = 0b00000000
DISPLAY_IR_FUNCTION_SET_5x10DOTS = 0b00000100
DISPLAY_IR_FUNCTION_SET_5x8DOTS = 0b00000000

DISPLAY_20x4_LINE_FIRST_CHARACTER_ADDRESS = (0, 64, 20, 84)

DISPLAY_RS_INSTRUCTION = 0
DISPLAY_RS_DATA = 1

DISPLAY_RW_WRITE = 0
DISPLAY_RW_READ = 1

PCF8574_I2C_BUS_8BIT_WRITE_ADDRESS = 78
PCF8574_I2C_FREQUENCY = 100_000


class DisplayConnection(Enum):
    """How the display is wired to the board."""

    GPIO_4BITS = auto()
    GPIO_8BITS = auto()
    I2C_PCF8574_IO_EXPANDER = auto()


class _Pin(IntEnum):
    A_PCF8574 = 3
    RS = 4
    RW = 5
    EN = 6
    D0 = 7
    D1 = 8
    D2 = 9
    D3 = 10
    D4 = 11
    D5 = 12
    D6 = 13
    D7 = 14


_EXPANDER_BITS = {
    _Pin.RS: 0b00000001,
    _Pin.RW: 0b00000010,
    _Pin.EN: 0b00000100,
    _Pin.A_PCF8574: 0b00001000,
    _Pin.D4: 0b00010000,
    _Pin.D5: 0b00100000,
    _Pin.D6: 0b01000000,
    _Pin.D7: 0b10000000,
}

_HIGH_NIBBLE = ((_Pin.D7, 0b10000000), (_Pin.D6, 0b01000000),
                (_Pin.D5, 0b00100000), (_Pin.D4, 0b00010000))
_LOW_NIBBLE_8BIT = ((_Pin.D3, 0b00001000), (_Pin.D2, 0b00000100),
                    (_Pin.D1, 0b00000010), (_Pin.D0, 0b00000001))
_LOW_NIBBLE_4BIT = ((_Pin.D7, 0b00001000), (_Pin.D6, 0b00000100),
                    (_Pin.D5, 0b00000010), (_Pin.D4, 0b00000001))


class Display:
    """Character display driven through one of three wiring options."""

    def __init__(
        self,
        connection: DisplayConnection = DisplayConnection.I2C_PCF8574_IO_EXPANDER,
        *,
        i2c: I2CBus | None = None,
        data_pins: Iterable[DigitalOut] | None = None,
        rs_pin: DigitalOut | None = None,
        en_pin: DigitalOut | None = None,
        sleep: Callable[[float], object] = delay,
    ) -> None:
        self.connection = connection
        self.i2c = i2c if i2c is not None else I2CBus()
        self.data_pins = (
            list(data_pins) if data_pins is not None else [DigitalOut() for _ in range(8)]
        )
        if len(self.data_pins) != 8:
            raise ValueError(f"display needs 8 data pins, got {len(self.data_pins)}")
        self.rs_pin = rs_pin if rs_pin is not None else DigitalOut()
        self.en_pin = en_pin if en_pin is not None else DigitalOut()
        self._sleep = sleep
        self.pcf8574_address = PCF8574_I2C_BUS_8BIT_WRITE_ADDRESS
        self._expander = dict.fromkeys(_EXPANDER_BITS, False)
        self._initial_8bit_done = False

    def init(self) -> None:
        """Run the power-on initialisation sequence of the controller."""
        if self.connection is DisplayConnection.I2C_PCF8574_IO_EXPANDER:
            self.pcf8574_address = PCF8574_I2C_BUS_8BIT_WRITE_ADDRESS
            self.i2c.frequency = PCF8574_I2C_FREQUENCY
            self._pin_write(_Pin.A_PCF8574, ON)

        self._initial_8bit_done = False
        self._sleep(50)

        eight_bits = DISPLAY_IR_FUNCTION_SET | DISPLAY_IR_FUNCTION_SET_8BITS
        self._instruction(eight_bits)
        self._sleep(5)
        self._instruction(eight_bits)
        self._sleep(1)
        self._instruction(eight_bits)
        self._sleep(1)

        if self.connection is DisplayConnection.GPIO_8BITS:
            self._instruction(
                DISPLAY_IR_FUNCTION_SET
                | DISPLAY_IR_FUNCTION_SET_8BITS
                | DISPLAY_IR_FUNCTION_SET_2LINES
                | DISPLAY_IR_FUNCTION_SET_5x8DOTS
            )
            self._sleep(1)
        else:
            self._instruction(DISPLAY_IR_FUNCTION_SET | DISPLAY_IR_FUNCTION_SET_4BITS)
            self._sleep(1)
            self._initial_8bit_done = True
            self._instruction(
                DISPLAY_IR_FUNCTION_SET
                | DISPLAY_IR_FUNCTION_SET_4BITS
                | DISPLAY_IR_FUNCTION_SET_2LINES
                | DISPLAY_IR_FUNCTION_SET_5x8DOTS
            )
            self._sleep(1)

        self._instruction(
            DISPLAY_IR_DISPLAY_CONTROL
            | DISPLAY_IR_DISPLAY_CONTROL_DISPLAY_OFF
            | DISPLAY_IR_DISPLAY_CONTROL_CURSOR_OFF
            | DISPLAY_IR_DISPLAY_CONTROL_BLINK_OFF
        )
        self._sleep(1)
        self._instruction(DISPLAY_IR_CLEAR_DISPLAY)
        self._sleep(1)
        self._instruction(
            DISPLAY_IR_ENTRY_MODE_SET
            | DISPLAY_IR_ENTRY_MODE_SET_INCREMENT
            | DISPLAY_IR_ENTRY_MODE_SET_NO_SHIFT
        )
        self._sleep(1)
        self._instruction(
            DISPLAY_IR_DISPLAY_CONTROL
            | DISPLAY_IR_DISPLAY_CONTROL_DISPLAY_ON
            | DISPLAY_IR_DISPLAY_CONTROL_CURSOR_OFF
            | DISPLAY_IR_DISPLAY_CONTROL_BLINK_OFF
        )
        self._sleep(1)

    def char_position_write(self, x: int, y: int) -> None:
        """Move the cursor to column ``x`` of line ``y``; other lines are ignored."""
        if 0 <= y < len(DISPLAY_20x4_LINE_FIRST_CHARACTER_ADDRESS):
            address = DISPLAY_20x4_LINE_FIRST_CHARACTER_ADDRESS[y] + x
            self._instruction(DISPLAY_IR_SET_DDRAM_ADDR | (address & 0xFF))
            self._sleep(1)

    def string_write(self, text: str) -> None:
        """Write ``text`` at the cursor, one byte per character."""
        for byte in text.encode("latin-1", errors="replace"):
            self._code_write(DISPLAY_RS_DATA, byte)

    def _instruction(self, code: int) -> None:
        self._code_write(DISPLAY_RS_INSTRUCTION, code)

    def _code_write(self, register: int, data: int) -> None:
        self._pin_write(_Pin.RS, register == DISPLAY_RS_DATA)
        self._pin_write(_Pin.RW, DISPLAY_RW_WRITE)
        self._data_bus_write(data)

    def _gpio_target(self, pin: _Pin) -> DigitalOut | None:
        if pin is _Pin.RS:
            return self.rs_pin
        if pin is _Pin.EN:
            return self.en_pin
        if _Pin.D0 <= pin <= _Pin.D7:
            index = pin - _Pin.D0
            if self.connection is DisplayConnection.GPIO_4BITS and index < 4:
                return None
            return self.data_pins[index]
        return None

    def _pin_write(self, pin: _Pin, value: object) -> None:
        level = bool(value)
        if self.connection is DisplayConnection.I2C_PCF8574_IO_EXPANDER:
            if pin in self._expander:
                self._expander[pin] = level
            data = sum(bit for name, bit in _EXPANDER_BITS.items() if self._expander[name])
            self.i2c.write(self.pcf8574_address, data)
        else:
            target = self._gpio_target(pin)
            if target is not None:
                target.write(level)

    def _pulse_enable(self) -> None:
        self._pin_write(_Pin.EN, ON)
        self._sleep(1)
        self._pin_write(_Pin.EN, OFF)
        self._sleep(1)

    def _data_bus_write(self, data: int) -> None:
        self._pin_write(_Pin.EN, OFF)
        for pin, mask in _HIGH_NIBBLE:
            self._pin_write(pin, data & mask)
        if self.connection is DisplayConnection.GPIO_8BITS:
            for pin, mask in _LOW_NIBBLE_8BIT:
                self._pin_write(pin, data & mask)
        elif self._initial_8bit_done:
            self._pulse_enable()
            for pin, mask in _LOW_NIBBLE_4BIT:
                self._pin_write(pin, data & mask)
        self._pulse_enable()