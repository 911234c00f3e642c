"""4x4 matrix keypad with scanning and debouncing."""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum, auto

from homealarm.hardware import OFF, ON, SYSTEM_TIME_INCREMENT_MS, DigitalIn, DigitalOut, PinMode

MATRIX_KEYPAD_NUMBER_OF_ROWS = 4
MATRIX_KEYPAD_NUMBER_OF_COLS = 4
DEBOUNCE_KEY_TIME_MS = 40

KEY_LAYOUT = ("123A", "456B", "789C", "*0#D")


class KeypadState(Enum):
    SCANNING = auto()
    DEBOUNCE = auto()
    KEY_HOLD_PRESSED = auto()


class MatrixKeypad:
    """Scans row outputs against column inputs and reports released keys.

    When no pins are supplied, simulated wiring is built and keys can be
    operated with :meth:`press` and :meth:`release`.
    """

    def __init__(
        self,
        update_time_ms: int = SYSTEM_TIME_INCREMENT_MS,
        rows: Iterable[DigitalOut] | None = None,
        cols: Iterable[DigitalIn] | None = None,
    ) -> None:
        self.update_time_ms = update_time_ms
        self._pressed: set[tuple[int, int]] = set()
        self.rows = (
            list(rows)
            if rows is not None
            else [DigitalOut(ON) for _ in range(MATRIX_KEYPAD_NUMBER_OF_ROWS)]
        )
        self.cols = (
            list(cols)
            if cols is not None
            else [
                DigitalIn(True, source=self._column_reader(col))
                for col in range(MATRIX_KEYPAD_NUMBER_OF_COLS)
            ]
        )
        self.state = KeypadState.SCANNING
        self._accumulated_debounce_ms = 0
        self._last_key: str | None = None
        self.init()

    def _column_reader(self, col: int):
        def read() -> bool:
            return not any(
                pressed_col == col and not self.rows[row].read()
                for row, pressed_col in self._pressed
            )

        return read

    @staticmethod
    def _position(key: str) -> tuple[int, int]:
        for row, labels in enumerate(KEY_LAYOUT):
            col = labels.find(key)
            if len(key) == 1 and col >= 0:
                return row, col
        raise ValueError(f"no such key on the keypad: {key!r}")

    def press(self, key: str) -> None:
        """Close the switch of ``key`` in the simulated wiring."""
        self._pressed.add(self._position(key))

    def release(self, key: str | None = None) -> None:
        """Open the switch of ``key``, or of every key when none is given."""
        if key is None:
            self._pressed.clear()
        else:
            self._pressed.discard(self._position(key))

    def init(self) -> None:
        self.state = KeypadState.SCANNING
        self._accumulated_debounce_ms = 0
        for pin in self.cols:
            pin.mode = PinMode.PULL_UP

    def scan(self) -> str | None:
        """Return the first key found closed, scanning row by row, or None."""
        for row_pin, labels in zip(self.rows, KEY_LAYOUT):
            for pin in self.rows:
                pin.write(ON)
            row_pin.write(OFF)
            for col_pin, label in zip(self.cols, labels):
                if not col_pin.read():
                    return label
        return None

    def update(self) -> str | None:
        """Advance the debounce state machine; return a key when it is released."""
        released: str | None = None

        if self.state is KeypadState.SCANNING:
            key = self.scan()
            if key is not None:
                self._last_key = key
                self._accumulated_debounce_ms = 0
                self.state = KeypadState.DEBOUNCE

        elif self.state is KeypadState.DEBOUNCE:
            if self._accumulated_debounce_ms >= DEBOUNCE_KEY_TIME_MS:
                key = self.scan()
                if key == self._last_key:
                    self.state = KeypadState.KEY_HOLD_PRESSED
                else:
                    self.state = KeypadState.SCANNING
            self._accumulated_debounce_ms += self.update_time_ms

        elif self.state is KeypadState.KEY_HOLD_PRESSED:
            key = self.scan()
            if key != self._last_key:
                if key is None:
                    released = self._last_key
                self.state = KeypadState.SCANNING

        else:
            self.state = KeypadState.SCANNING

        return released