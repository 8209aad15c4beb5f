"""Parsing of the overdrive clock and voltage table."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from itertools import takewhile
from typing import Callable, Optional

from amdtune.errors import ClockStateError

ENGINE_CLOCK_LABEL = "OD_SCLK:"
MEMORY_CLOCK_LABEL = "OD_MCLK:"
CURVE_POINTS_LABEL = "OD_VDDC_CURVE:"
RANGE_LABEL = "OD_RANGE:"

_U32_MAX = 2**32 - 1

Kind = ClockStateError.Kind


def _parse_u32(digits: str) -> int:
    if digits.isascii() and digits.isdigit():
        number = int(digits)
        if number <= _U32_MAX:
            return number
    raise ClockStateError(Kind.PARSE_VALUE, digits)


def _parse_quantity(
    text: str, kind: ClockStateError.Kind, unit_ok: Callable[[str], bool]
) -> tuple[int, str]:
    """Split text into a leading number and a unit suffix."""
    digits = ""
    unit = ""
    value: Optional[int] = None
    for char in text.strip():
        if char.isnumeric():
            if value is not None:
                raise ClockStateError(kind, text)
            digits += char
        elif value is None:
            if not digits:
                raise ClockStateError(kind, text)
            value = _parse_u32(digits)
            unit = char
        else:
            unit += char
    if value is None or not unit_ok(unit):
        raise ClockStateError(kind, text)
    return value, unit


@dataclass(frozen=True)
class Frequency:
    """A frequency such as ``800Mhz``."""

    value: int
    unit: str

    @classmethod
    def parse(cls, text: str) -> "Frequency":
        value, unit = _parse_quantity(
            text, Kind.NOT_FREQUENCY, lambda u: u.endswith(("hz", "Hz"))
        )
        return cls(value, unit)

    def __str__(self) -> str:
        return f"{self.value}{self.unit}"


@dataclass(frozen=True)
class Voltage:
    """A voltage such as ``706mV``."""

    value: int
    unit: str

    @classmethod
    def parse(cls, text: str) -> "Voltage":
        value, unit = _parse_quantity(text, Kind.NOT_VOLTAGE, lambda u: u.endswith("V"))
        return cls(value, unit)

    def __str__(self) -> str:
        return f"{self.value}{self.unit}"


@dataclass(frozen=True)
class CurvePoint:
    """One point of the voltage curve."""

    freq: Frequency
    voltage: Voltage


class _Section(Enum):
    UNKNOWN = auto()
    ENGINE = auto()
    MEMORY = auto()
    CURVE = auto()


_SECTION_LABELS = {
    ENGINE_CLOCK_LABEL: _Section.ENGINE,
    MEMORY_CLOCK_LABEL: _Section.MEMORY,
    CURVE_POINTS_LABEL: _Section.CURVE,
}


@dataclass
class ClockState:
    """Engine and memory clock limits and the voltage curve of a card."""

    curve_labels: list[CurvePoint] = field(default_factory=list)
    engine_label_lowest: Optional[Frequency] = None
    engine_label_highest: Optional[Frequency] = None
    memory_label_lowest: Optional[Frequency] = None
    memory_label_highest: Optional[Frequency] = None

    @classmethod
    def parse(cls, text: str) -> "ClockState":
        state = cls()
        section = _Section.UNKNOWN
        for raw in text.split("\n"):
            raw = raw.removesuffix("\r")
            stripped = raw.lstrip(" \0")
            if not stripped:
                continue
            line = stripped.strip()
            if line == RANGE_LABEL:
                break
            if line in _SECTION_LABELS:
                section = _SECTION_LABELS[line]
            elif section is _Section.ENGINE:
                if state.engine_label_lowest is None:
                    state.engine_label_lowest = parse_freq_line(line)
                else:
                    state.engine_label_highest = parse_freq_line(line)
            elif section is _Section.MEMORY:
                if state.memory_label_lowest is None:
                    state.memory_label_lowest = parse_freq_line(line)
                else:
                    state.memory_label_highest = parse_freq_line(line)
            elif section is _Section.CURVE:
                freq, voltage = parse_freq_voltage_line(line)
                state.curve_labels.append(CurvePoint(freq, voltage))
        return state


def _consume_mode_number(line: str) -> str:
    """Strip a leading ``<number>:`` from line and return the remainder."""
    digits = "".join(takewhile(str.isnumeric, line))
    rest = line[len(digits):]
    if not digits or not rest.startswith(":"):
        raise ClockStateError(Kind.INVALID_ENGINE_CLOCK_SECTION, line)
    return rest[1:]


def _consume_word(rest: str) -> tuple[str, str]:
    word, _, remainder = rest.lstrip(" ").partition(" ")
    return word, remainder


def parse_freq_line(line: str) -> Frequency:
    """Parse a line such as ``0: 800Mhz``."""
    word, _ = _consume_word(_consume_mode_number(line))
    return Frequency.parse(word)


def parse_freq_voltage_line(line: str) -> tuple[Frequency, Voltage]:
    """Parse a line such as ``0: 800MHz 706mV``."""
    freq_word, rest = _consume_word(_consume_mode_number(line))
    freq = Frequency.parse(freq_word)
    volt_word, _ = _consume_word(rest)
    return freq, Voltage.parse(volt_word)