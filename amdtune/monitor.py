"""Temperature and fan readings of a card's hardware monitor, and their display."""

from __future__ import annotations

import math
import os
import re
from enum import Enum
from pathlib import Path
from typing import Iterable, Optional, Sequence, Union

from amdtune.errors import MonitorError

PULSE_WIDTH_MODULATION = "pwm1"
PULSE_WIDTH_MODULATION_MIN = "pwm1_min"
PULSE_WIDTH_MODULATION_MAX = "pwm1_max"
DEFAULT_PWM_MIN = 0
DEFAULT_PWM_MAX = 255
PWM_NOTE = "> PWM may be 0 even if RPM is higher"

_TEMP_INPUT = re.compile(r"temp(\d+)_input")
_U32_MAX = 2**32 - 1
_U64_MAX = 2**64 - 1

Temperatures = Sequence[tuple[str, Optional[float]]]


def _parse_unsigned(text: str, limit: int) -> int:
    if text.isascii() and text.isdigit():
        number = int(text)
        if number <= limit:
            return number
    raise ValueError(text)


def _discover_temp_inputs(hw_mon: Path) -> list[str]:
    found = []
    try:
        entries = list(hw_mon.iterdir())
    except OSError:
        return []
    for entry in entries:
        match = _TEMP_INPUT.fullmatch(entry.name)
        if match:
            found.append((int(match.group(1)), entry.name))
    return [name for _, name in sorted(found)]


class AmdMon:
    """Readings taken from one hardware monitor directory."""

    def __init__(
        self,
        hw_mon: Union[str, os.PathLike],
        inputs: Optional[Iterable[str]] = None,
        temp_input: Optional[str] = None,
    ) -> None:
        self.hw_mon = Path(hw_mon)
        self.inputs = (
            list(inputs) if inputs is not None else _discover_temp_inputs(self.hw_mon)
        )
        self.temp_input = temp_input
        self._pwm_min: Optional[int] = None
        self._pwm_max: Optional[int] = None

    def _read(self, name: str) -> str:
        return (self.hw_mon / name).read_text().strip()

    def _value_or(self, name: str, default: int) -> int:
        try:
            return _parse_unsigned(self._read(name), _U32_MAX)
        except (OSError, ValueError):
            return default

    def _temp_or_none(self, name: str) -> Optional[float]:
        try:
            return self.read_gpu_temp(name) / 1000
        except (OSError, MonitorError):
            return None

    def gpu_temp(self) -> list[tuple[str, Optional[float]]]:
        """Every temperature input in degrees, None where it cannot be read."""
        return [(name, self._temp_or_none(name)) for name in self.inputs]

    def gpu_temp_of(self, input_idx: int) -> Optional[tuple[str, Optional[float]]]:
        """The temperature of one input by position, None if there is no such input."""
        if not 0 <= input_idx < len(self.inputs):
            return None
        name = self.inputs[input_idx]
        return name, self._temp_or_none(name)

    def read_gpu_temp(self, name: str) -> int:
        """Raw temperature of an input in millidegrees."""
        text = self._read(name)
        try:
            return _parse_unsigned(text, _U64_MAX)
        except ValueError:
            raise MonitorError(MonitorError.Kind.NON_INT_TEMP, text) from None

    def pwm(self) -> int:
        """Current fan modulation."""
        text = self._read(PULSE_WIDTH_MODULATION)
        try:
            return _parse_unsigned(text, _U32_MAX)
        except ValueError:
            raise MonitorError(MonitorError.Kind.NON_INT_PWM, text) from None

    def pwm_min(self) -> int:
        """Minimal modulation, read once and remembered."""
        if self._pwm_min is None:
            self._pwm_min = self._value_or(PULSE_WIDTH_MODULATION_MIN, DEFAULT_PWM_MIN)
        return self._pwm_min

    def pwm_max(self) -> int:
        """Maximal modulation, read once and remembered."""
        if self._pwm_max is None:
            self._pwm_max = self._value_or(PULSE_WIDTH_MODULATION_MAX, DEFAULT_PWM_MAX)
        return self._pwm_max

    def max_gpu_temp(self) -> float:
        """The configured input's temperature, or the highest of all inputs."""
        if self.temp_input is not None:
            return self.read_gpu_temp(self.temp_input) / 1000
        if not self.inputs:
            raise MonitorError(MonitorError.Kind.EMPTY_TEMP_SET)
        readings = []
        for name in self.inputs:
            try:
                readings.append(self.read_gpu_temp(name))
            except (OSError, MonitorError):
                readings.append(0)
        return max(readings) / 1000


class MonitorFormat(Enum):
    """Layout of the watch display."""

    SHORT = "short"
    VERBOSE = "verbose"

    @classmethod
    def parse(cls, text: str) -> "MonitorFormat":
        if text in ("short", "s"):
            return cls.SHORT
        if text in ("verbose", "v", "long", "l"):
            return cls.VERBOSE
        raise MonitorError(MonitorError.Kind.INVALID_MONITOR_FORMAT)


def linear_map(
    value: float, from_min: float, from_max: float, to_min: float, to_max: float
) -> float:
    """Map value from one range onto another linearly."""
    numerator = (value - from_min) * (to_max - to_min)
    span = from_max - from_min
    if span == 0:
        if numerator == 0:
            return math.nan
        return math.copysign(math.inf, numerator) + to_min
    return numerator / span + to_min


def _round_half_away(value: float) -> float:
    if not math.isfinite(value):
        return value
    return math.copysign(math.floor(abs(value) + 0.5), value)


def _display_float(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    if value == int(value):
        return str(int(value))
    return repr(value)


def _percent(pwm: int, pwm_min: int, pwm_max: int) -> str:
    return _display_float(
        _round_half_away(linear_map(float(pwm), pwm_min, pwm_max, 0.0, 100.0))
    )


def _card_label(card: object) -> str:
    return str(card).replace("card", "")


def format_short(
    card: object, temp: float, pwm_min: int, pwm_max: int, pwm: int
) -> str:
    """One card's block of the short watch display."""
    header = f"Card {_card_label(card):<3} | Temp     |  MIN |  MAX |  PWM |   %"
    row = (
        f"         | {temp:>5.2f}    | {pwm_min:>4} | {pwm_max:>4} | {pwm:>4} | "
        f"{_percent(pwm, pwm_min, pwm_max):>3}"
    )
    return f"{header}\n{row}\n"


def format_verbose(
    card: object,
    pwm_min: int,
    pwm_max: int,
    pwm: Optional[int],
    temps: Temperatures,
) -> str:
    """One card's block of the verbose watch display; pwm None means unreadable."""
    shown_pwm = "FAILED" if pwm is None else str(pwm)
    lines = [
        f"Card {_card_label(card):<3}",
        "  MIN |  MAX |  PWM   |   %",
        f" {pwm_min:>4} | {pwm_max:>4} | {shown_pwm:>6} | "
        f"{_percent(pwm or 0, pwm_min, pwm_max):>3}",
        "",
        "  Current temperature",
    ]
    lines.extend(
        f"  {name.replace('_input', ''):<6} | {(temp or 0.0):>9.2f}"
        for name, temp in temps
    )
    return "\n".join(lines) + "\n"


def select_temperature(temperatures: Temperatures, temp_input: Optional[str]) -> float:
    """Pick the temperature that is logged: the configured input, else the second, else the first."""
    if temp_input is not None:
        return next(
            (value or 0.0 for name, value in temperatures if name == temp_input), 0.0
        )
    if len(temperatures) > 1:
        return temperatures[1][1] or 0.0
    if temperatures:
        return temperatures[0][1] or 0.0
    return 0.0