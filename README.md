# amdtune

A small library for inspecting and tuning AMD GPUs on Linux through the
kernel's sysfs files. It has no dependencies beyond the standard library.

- `amdtune.clock_state` parses the overdrive table (`pp_od_clk_voltage`) into
  engine clock, memory clock and voltage-curve values.
- `amdtune.voltage` writes new clock/voltage states to a card and commits them.
- `amdtune.monitor` reads GPU temperatures and fan pulse-width modulation from a
  hardware-monitor directory and formats them as text tables.
- `amdtune.errors` holds the exceptions; all of them derive from `AmdError`.

## Parsing clock states

```python
from amdtune.clock_state import ClockState, Frequency, Voltage

Frequency.parse("2100Mhz")   # Frequency(value=2100, unit='Mhz')
Voltage.parse("706mV")       # Voltage(value=706, unit='mV')

table = """OD_SCLK:
0: 800Mhz
1: 2100Mhz
OD_MCLK:
1: 875MHz
OD_VDDC_CURVE:
0: 800MHz 706mV
1: 1450MHz 772mV
2: 2100MHz 1143mV
OD_RANGE:
SCLK:     800Mhz       2150Mhz
"""
states = ClockState.parse(table)
str(states.engine_label_highest)   # '2100Mhz'
states.memory_label_highest        # None
len(states.curve_labels)           # 3
```

A frequency must end in `hz` or `Hz`, a voltage in `V`. Parsing stops at the
`OD_RANGE:` line. Anything malformed raises `ClockStateError`; its `kind`
attribute tells which check failed (`NOT_FREQUENCY`, `NOT_VOLTAGE`,
`PARSE_VALUE` or `INVALID_ENGINE_CLOCK_SECTION`). The helpers
`parse_freq_line` and `parse_freq_voltage_line` parse single table lines such as
`0: 800Mhz` and `0: 800MHz 706mV`.

## Changing voltage states

`VoltageManipulator` takes the path of a card's device directory (the one that
contains `pp_od_clk_voltage`):

```python
from amdtune.clock_state import Frequency, Voltage
from amdtune.voltage import HardwareModule, VoltageManipulator, change_state, format_states

manipulator = VoltageManipulator("/sys/class/drm/card0/device")
print(format_states(manipulator.clock_states()), end="")

manipulator.write_state(
    1,
    Frequency.parse("2000Mhz"),
    Voltage.parse("1100mV"),
    HardwareModule.parse("engine"),
)
manipulator.write_apply()
```

`HardwareModule.parse` accepts `engine` or `memory` in any letter case and
raises `VoltageError` otherwise.

`change_state(device, index, module, frequency, voltage, apply_immediately)`
does the same in one call. `module`, `frequency` and `voltage` may be given as
strings, which are parsed. A missing index, module, frequency or voltage raises
`ChangeStateError`; a `device` of `None` raises `VoltageError` with kind
`NO_AMD_GPU`.

## Monitoring

```python
from amdtune.monitor import AmdMon, MonitorFormat, format_short, select_temperature

mon = AmdMon("/sys/class/drm/card0/device/hwmon/hwmon1")
mon.gpu_temp()       # [('temp1_input', 45.0), ('temp2_input', 51.0), ...]
mon.max_gpu_temp()   # highest reading, in degrees
print(format_short("card0", mon.max_gpu_temp(), mon.pwm_min(), mon.pwm_max(), mon.pwm()), end="")
```

- When no `inputs` are given, `AmdMon` finds the `tempN_input` files in the
  directory, ordered by number. With `temp_input` set, `max_gpu_temp` reads only
  that input.
- `gpu_temp` and `gpu_temp_of` report unreadable inputs as `None`.
  `read_gpu_temp` returns millidegrees; it and `pwm` raise `MonitorError` for
  non-numeric contents and `OSError` for missing files.
- `pwm_min` and `pwm_max` read `pwm1_min` / `pwm1_max` once and fall back to
  0 and 255.
- `MonitorFormat.parse` accepts `short`/`s` and `verbose`/`v`/`long`/`l`.
- `format_short` and `format_verbose` render one card's block of text;
  `format_verbose` shows `FAILED` when `pwm` is `None`.
- `linear_map` maps a value between ranges; the tables use it to show the
  modulation as a percentage between the minimum and maximum.
- `select_temperature` picks one reading from a `gpu_temp()` list: the named
  input if given, else the second reading, else the first, else 0.

## What this package does not do

It is a library only: it installs no command-line program. It does not locate
cards or hardware-monitor directories, read configuration files, run a
periodically refreshing display, or write statistics to a file; the caller
supplies the paths and decides how often to read and where to print.