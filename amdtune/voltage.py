"""Reading and changing the overdrive clock/voltage states of a card."""

from __future__ import annotations

import os
from enum import Enum
from pathlib import Path
from typing import Callable, Optional, TypeVar, Union

from amdtune.clock_state import ClockState, Frequency, Voltage
from amdtune.errors import ChangeStateError, VoltageError

CLOCK_VOLTAGE_FILE = "pp_od_clk_voltage"

_T = TypeVar("_T")


class HardwareModule(Enum):
    """GPU part whose clock state is changed; the value is its command letter."""

    ENGINE = "s"
    MEMORY = "m"

    @classmethod
    def parse(cls, text: str) -> "HardwareModule":
        names = {"memory": cls.MEMORY, "engine": cls.ENGINE}
        try:
            return names[text.lower()]
        except KeyError:
            raise VoltageError(VoltageError.Kind.UNKNOWN_HARDWARE_MODULE, text) from None


class VoltageManipulator:
    """Access to the clock/voltage control file of one card's device directory."""

    def __init__(self, device: Union[str, os.PathLike]) -> None:
        self.device = Path(device)

    @property
    def _control_file(self) -> Path:
        return self.device / CLOCK_VOLTAGE_FILE

    def write_apply(self) -> None:
        """Commit previously written states."""
        self._control_file.write_text("c")

    def write_state(
        self,
        state_index: int,
        freq: Frequency,
        voltage: Voltage,
        module: HardwareModule,
    ) -> None:
        """Write a new frequency and voltage for one state of a module."""
        self._control_file.write_text(f"{module.value} {state_index} {freq} {voltage}")

    def clock_states(self) -> ClockState:
        """Read and parse the current clock state table."""
        return ClockState.parse(self._control_file.read_text())


def _require(
    value: object, parse: Callable[[str], _T], kind: ChangeStateError.Kind
) -> _T:
    if value is None:
        raise ChangeStateError(kind)
    if isinstance(value, str):
        return parse(value)
    return value  # type: ignore[return-value]


def change_state(
    device: Optional[Union[str, os.PathLike]],
    index: Optional[int],
    module: Optional[Union[HardwareModule, str]],
    frequency: Optional[Union[Frequency, str]],
    voltage: Optional[Union[Voltage, str]],
    apply_immediately: bool = False,
) -> None:
    """Change one clock state of a card, optionally committing it at once.

    String arguments are parsed; missing ones raise ChangeStateError.
    """
    if device is None:
        raise VoltageError(VoltageError.Kind.NO_AMD_GPU)
    if index is None:
        raise ChangeStateError(ChangeStateError.Kind.INDEX)
    freq = _require(frequency, Frequency.parse, ChangeStateError.Kind.FREQ)
    volt = _require(voltage, Voltage.parse, ChangeStateError.Kind.VOLTAGE)
    part = _require(module, HardwareModule.parse, ChangeStateError.Kind.MODULE)
    manipulator = VoltageManipulator(device)
    manipulator.write_state(index, freq, volt, part)
    if apply_immediately:
        manipulator.write_apply()


def format_states(states: ClockState) -> str:
    """Render a clock state table as a human readable report."""
    lines = ["Engine clock frequencies:"]
    if states.engine_label_lowest is not None:
        lines.append(f"  LOWEST {states.engine_label_lowest}")
    if states.engine_label_highest is not None:
        lines.append(f"  HIGHEST {states.engine_label_highest}")
    lines += ["", "Memory clock frequencies:"]
    if states.memory_label_lowest is not None:
        lines.append(f"  LOWEST {states.memory_label_lowest}")
    if states.memory_label_highest is not None:
        lines.append(f"  HIGHEST {states.memory_label_highest}")
    lines += ["", "Curves:"]
    lines.extend(
        f"  {str(point.freq):>10} {str(point.voltage):>10}"
        for point in states.curve_labels
    )
    lines.append("")
    return "\n".join(lines) + "\n"