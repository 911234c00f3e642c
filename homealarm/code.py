"""Alarm deactivation code: storage, comparison and incorrect-attempt tracking."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from enum import Enum, auto

CODE_NUMBER_OF_KEYS = 3
DEFAULT_CODE = "180"
MAX_INCORRECT_CODES = 5


class CodeOrigin(Enum):
    """Where an entered code came from."""

    KEYPAD = auto()
    PC_SERIAL = auto()


@dataclass
class CodeEntry:
    """A code being entered by the user and whether it is complete."""

    keys: list[str] = field(default_factory=list)
    complete: bool = False

    def clear(self) -> None:
        self.keys.clear()
        self.complete = False


@dataclass
class AlarmIndicators:
    """States shown by the incorrect-code and system-blocked LEDs."""

    incorrect_code: bool = False
    system_blocked: bool = False


class Code:
    """Holds the deactivation code and checks entries against it."""

    def __init__(
        self,
        indicators: AlarmIndicators | None = None,
        entries: dict[CodeOrigin, CodeEntry] | None = None,
        serial_write: Callable[[str], object] | None = None,
        sequence: Iterable[str] = DEFAULT_CODE,
    ) -> None:
        self.indicators = indicators if indicators is not None else AlarmIndicators()
        self.entries = {origin: CodeEntry() for origin in CodeOrigin}
        if entries:
            self.entries.update(entries)
        self._serial_write = serial_write if serial_write is not None else (lambda text: None)
        self.incorrect_attempts = 0
        self._sequence: tuple[str, ...] = ()
        self.write(sequence)

    @property
    def sequence(self) -> str:
        return "".join(self._sequence)

    def write(self, sequence: Iterable[str]) -> None:
        """Replace the stored code."""
        keys = tuple(sequence)
        if len(keys) != CODE_NUMBER_OF_KEYS:
            raise ValueError(
                f"code must have {CODE_NUMBER_OF_KEYS} keys, got {len(keys)}"
            )
        self._sequence = keys

    def matches(self, candidate: Iterable[str]) -> bool:
        return tuple(candidate) == self._sequence

    def match_from(self, origin: CodeOrigin) -> bool:
        """Check a completed entry from ``origin``; True when it is correct."""
        entry = self.entries[origin]
        correct = False
        if entry.complete:
            correct = self.matches(entry.keys)
            entry.complete = False
            if correct:
                self._deactivate()
            else:
                self.indicators.incorrect_code = True
                self.incorrect_attempts += 1
            if origin is CodeOrigin.PC_SERIAL:
                verdict = "correct" if correct else "incorrect"
                self._serial_write(f"\r\nThe code is {verdict}\r\n\r\n")

        if self.incorrect_attempts >= MAX_INCORRECT_CODES:
            self.indicators.system_blocked = True
        return correct

    def _deactivate(self) -> None:
        self.indicators.system_blocked = False
        self.indicators.incorrect_code = False
        self.incorrect_attempts = 0