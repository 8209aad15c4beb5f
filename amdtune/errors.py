"""Exceptions raised by the GPU clock, voltage and monitoring tools."""

from __future__ import annotations

import json
from enum import Enum
from typing import Any


def _debug(text: Any) -> str:
    """Render a value the way a diagnostic message quotes it."""
    return json.dumps(str(text), ensure_ascii=False)


class AmdError(Exception):
    """Base class for every error raised by the package."""


class _KindedError(AmdError):
    """An error identified by a kind and an optional offending value."""

    Kind: type[Enum]

    def __init__(self, kind: Enum, value: Any = None) -> None:
        self.kind = kind
        self.value = value
        template = kind.value
        message = template.format(_debug(value)) if value is not None else template
        super().__init__(message)

    def __eq__(self, other: object) -> bool:
        if type(self) is not type(other):
            return NotImplemented
        return self.kind == other.kind and self.value == other.value

    def __hash__(self) -> int:
        return hash((type(self), self.kind, self.value))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.kind.name}, {self.value!r})"


class ClockStateError(_KindedError):
    """A clock state table, frequency or voltage could not be parsed."""

    class Kind(Enum):
        PARSE_VALUE = "Can't parse value. {}"
        NOT_VOLTAGE = "Value {} is not a voltage"
        NOT_FREQUENCY = "Value {} is not a frequency"
        INVALID_ENGINE_CLOCK_SECTION = (
            "Voltage section for engine clock is not valid. Line {} is malformed"
        )


class ChangeStateError(_KindedError):
    """A required argument for changing a clock state is missing."""

    class Kind(Enum):
        INDEX = "No profile index was given"
        FREQ = "No frequency was given"
        VOLTAGE = "No voltage was given"
        MODULE = "No AMD GPU module was given (either memory or engine)"


class VoltageError(_KindedError):
    """The voltage tool cannot find a card or understand a module name."""

    class Kind(Enum):
        NO_AMD_GPU = "No AMD GPU card was found"
        UNKNOWN_HARDWARE_MODULE = "Unknown hardware module {}"


class MonitorError(_KindedError):
    """Temperature or fan readings are missing or malformed."""

    class Kind(Enum):
        NO_HW_MON = "Mon AMD GPU card was found"
        NON_INT_TEMP = "AMD GPU temperature is malformed. It should be number. {}"
        NON_INT_PWM = "AMD GPU fan speed is malformed. It should be number. {}"
        INVALID_MONITOR_FORMAT = (
            "Monitor format is not valid. "
            "Available values are: short, s, long l, verbose and v"
        )
        EMPTY_TEMP_SET = (
            "Failed to read AMD GPU temperatures from tempX_input. No input was found"
        )