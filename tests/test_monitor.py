import math

import pytest

from amdtune.errors import MonitorError
from amdtune.monitor import (
    AmdMon,
    MonitorFormat,
    format_short,
    format_verbose,
    linear_map,
    select_temperature,
)


@pytest.fixture
def hwmon(tmp_path):
    (tmp_path / "temp1_input").write_text("41000\n")
    (tmp_path / "temp2_input").write_text("52000\n")
    (tmp_path / "temp3_input").write_text("47000\n")
    (tmp_path / "pwm1").write_text("120\n")
    (tmp_path / "pwm1_min").write_text("10\n")
    (tmp_path / "pwm1_max").write_text("200\n")
    return tmp_path


def test_discovers_inputs_in_order(hwmon):
    mon = AmdMon(hwmon)
    assert mon.inputs == ["temp1_input", "temp2_input", "temp3_input"]


def test_read_gpu_temp(hwmon):
    assert AmdMon(hwmon).read_gpu_temp("temp2_input") == 52000


def test_read_gpu_temp_malformed(hwmon):
    (hwmon / "temp1_input").write_text("hot")
    with pytest.raises(MonitorError) as info:
        AmdMon(hwmon).read_gpu_temp("temp1_input")
    assert info.value.kind is MonitorError.Kind.NON_INT_TEMP


def test_gpu_temp_matches_raw_readings(hwmon):
    mon = AmdMon(hwmon)
    temps = mon.gpu_temp()
    assert [name for name, _ in temps] == mon.inputs
    for name, value in temps:
        assert value * 1000 == mon.read_gpu_temp(name)


def test_gpu_temp_unreadable_is_none(hwmon):
    (hwmon / "temp3_input").write_text("x")
    mon = AmdMon(hwmon)
    assert mon.gpu_temp()[2] == ("temp3_input", None)


def test_gpu_temp_of(hwmon):
    mon = AmdMon(hwmon)
    assert mon.gpu_temp_of(0) == mon.gpu_temp()[0]
    assert mon.gpu_temp_of(3) is None
    assert mon.gpu_temp_of(-1) is None


def test_pwm(hwmon):
    assert AmdMon(hwmon).pwm() == 120


def test_pwm_malformed(hwmon):
    (hwmon / "pwm1").write_text("-5")
    with pytest.raises(MonitorError) as info:
        AmdMon(hwmon).pwm()
    assert info.value.kind is MonitorError.Kind.NON_INT_PWM


def test_pwm_limits_are_cached(hwmon):
    mon = AmdMon(hwmon)
    assert (mon.pwm_min(), mon.pwm_max()) == (10, 200)
    (hwmon / "pwm1_min").write_text("30")
    (hwmon / "pwm1_max").write_text("90")
    assert (mon.pwm_min(), mon.pwm_max()) == (10, 200)


def test_pwm_limits_default(tmp_path):
    mon = AmdMon(tmp_path)
    assert mon.pwm_min() == 0
    assert mon.pwm_max() == 255


def test_max_gpu_temp_is_highest(hwmon):
    mon = AmdMon(hwmon)
    assert mon.max_gpu_temp() == max(v for _, v in mon.gpu_temp())


def test_max_gpu_temp_uses_configured_input(hwmon):
    mon = AmdMon(hwmon, temp_input="temp1_input")
    assert mon.max_gpu_temp() * 1000 == mon.read_gpu_temp("temp1_input")


def test_max_gpu_temp_ignores_bad_input(hwmon):
    (hwmon / "temp2_input").write_text("bad")
    mon = AmdMon(hwmon)
    assert mon.max_gpu_temp() * 1000 == mon.read_gpu_temp("temp3_input")


def test_max_gpu_temp_empty(tmp_path):
    with pytest.raises(MonitorError) as info:
        AmdMon(tmp_path, inputs=[]).max_gpu_temp()
    assert info.value.kind is MonitorError.Kind.EMPTY_TEMP_SET


@pytest.mark.parametrize("text", ["short", "s"])
def test_format_short_names(text):
    assert MonitorFormat.parse(text) is MonitorFormat.SHORT


@pytest.mark.parametrize("text", ["verbose", "v", "long", "l"])
def test_format_verbose_names(text):
    assert MonitorFormat.parse(text) is MonitorFormat.VERBOSE


def test_format_invalid():
    with pytest.raises(MonitorError) as info:
        MonitorFormat.parse("Short")
    assert info.value.kind is MonitorError.Kind.INVALID_MONITOR_FORMAT


def test_linear_map_endpoints_and_order():
    assert linear_map(10.0, 10.0, 200.0, 0.0, 100.0) == 0.0
    assert linear_map(200.0, 10.0, 200.0, 0.0, 100.0) == 100.0
    low = linear_map(50.0, 10.0, 200.0, 0.0, 100.0)
    high = linear_map(150.0, 10.0, 200.0, 0.0, 100.0)
    assert 0.0 < low < high < 100.0


def test_linear_map_empty_range():
    undefined = linear_map(5.0, 5.0, 5.0, 0.0, 100.0)
    assert repr(undefined) == "nan"
    assert linear_map(6.0, 5.0, 5.0, 0.0, 100.0) == math.inf


def test_format_short_header():
    text = format_short("card0", 45.0, 0, 255, 255)
    header, row = text.splitlines()
    assert header == "Card 0   | Temp     |  MIN |  MAX |  PWM |   %"
    assert row == "         | 45.00    |    0 |  255 |  255 | 100"


def test_format_short_percent_at_minimum():
    row = format_short("card1", 30.5, 10, 200, 10).splitlines()[1]
    assert row.endswith("|   0")


def test_format_verbose_failed_pwm():
    text = format_verbose("card0", 0, 255, None, [("temp1_input", 41.0), ("temp2_input", None)])
    lines = text.splitlines()
    assert lines[0] == "Card 0  "
    assert lines[1] == "  MIN |  MAX |  PWM   |   %"
    assert "FAILED" in lines[2]
    assert lines[4] == "  Current temperature"
    assert lines[5].startswith("  temp1  |")
    assert lines[6].endswith("0.00")


def test_select_temperature_configured():
    temps = [("temp1_input", 40.0), ("temp2_input", 50.0)]
    assert select_temperature(temps, "temp1_input") == 40.0
    assert select_temperature(temps, "temp9_input") == 0.0


def test_select_temperature_second_then_first():
    assert select_temperature([("a", 1.0), ("b", 2.0), ("c", 3.0)], None) == 2.0
    assert select_temperature([("a", 1.0), ("b", None)], None) == 0.0
    assert select_temperature([("a", 7.0)], None) == 7.0
    assert select_temperature([], None) == 0.0