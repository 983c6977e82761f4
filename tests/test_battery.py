import pytest

from neostatus.battery import (
    Battery,
    BatteryDoesNotExistError,
    BatteryLabels,
    render,
)
from neostatus.common import pango_markup


def make_battery(root, name="BAT0", **files):
    directory = root / name
    directory.mkdir(parents=True, exist_ok=True)
    for attribute, value in files.items():
        (directory / attribute).write_text(f"{value}\n")
    return directory


CHARGE_FILES = dict(
    charge_full="4000",
    charge_full_design="4000",
    charge_now="3000",
    current_now="1000",
)

ENERGY_FILES = dict(
    energy_full="6000",
    energy_full_design="6000",
    energy_now="3000",
    power_now="2000",
)


def test_missing_battery_raises(tmp_path):
    with pytest.raises(BatteryDoesNotExistError) as info:
        Battery("BAT9", sys_path=str(tmp_path))
    assert str(info.value) == "BAT9"
    assert info.value.message == "battery does not exist"


def test_missing_attributes_raise(tmp_path):
    make_battery(tmp_path, status="Full", capacity="100")
    with pytest.raises(RuntimeError, match="unable to find all attributes"):
        Battery("BAT0", sys_path=str(tmp_path))


def test_full_battery_has_no_time(tmp_path):
    make_battery(tmp_path, status="Full", capacity="100", **CHARGE_FILES)
    battery = Battery("BAT0", sys_path=str(tmp_path))
    assert battery.state == "Full"
    assert battery.time == 0
    assert battery.formatted_time() == ""
    assert battery.formatted_percent() == "100%"


def test_unknown_state_has_no_time(tmp_path):
    make_battery(tmp_path, status="Unknown", capacity="57", **ENERGY_FILES)
    battery = Battery("BAT0", sys_path=str(tmp_path))
    assert battery.time == 0
    assert battery.formatted_percent() == "57%"


def test_charging_with_charge_and_current(tmp_path):
    make_battery(tmp_path, status="Charging", capacity="75", **CHARGE_FILES)
    battery = Battery("BAT0", sys_path=str(tmp_path))
    assert battery.time == pytest.approx(1.0)
    assert battery.formatted_time() == "1:00"


def test_discharging_with_energy_and_power(tmp_path):
    make_battery(tmp_path, status="Discharging", capacity="50", **ENERGY_FILES)
    battery = Battery("BAT0", sys_path=str(tmp_path))
    assert battery.formatted_time() == "1:30"
    assert battery.percent == 50


def test_formatted_time_empty_for_short_times(tmp_path):
    make_battery(tmp_path, status="Discharging", capacity="50", **ENERGY_FILES)
    battery = Battery("BAT0", sys_path=str(tmp_path))
    battery.time = 1 / 60
    assert battery.formatted_time() == ""


def test_formatted_time_pads_minutes(tmp_path):
    make_battery(tmp_path, status="Discharging", capacity="50", **ENERGY_FILES)
    battery = Battery("BAT0", sys_path=str(tmp_path))
    battery.time = 2 + 5 / 60
    hours, minutes = battery.formatted_time().split(":")
    assert hours == "2"
    assert len(minutes) == 2
    assert minutes.startswith("0")


def test_update_rereads_files(tmp_path):
    directory = make_battery(tmp_path, status="Charging", capacity="40", **CHARGE_FILES)
    battery = Battery("BAT0", sys_path=str(tmp_path))
    assert battery.percent == 40
    (directory / "capacity").write_text("41\n")
    (directory / "status").write_text("Full\n")
    battery.update()
    assert battery.percent == 41
    assert battery.state == "Full"
    assert battery.time == 0


def test_update_raises_when_battery_removed(tmp_path):
    directory = make_battery(tmp_path, status="Full", capacity="100", **CHARGE_FILES)
    battery = Battery("BAT0", sys_path=str(tmp_path))
    for child in directory.iterdir():
        child.unlink()
    directory.rmdir()
    with pytest.raises(BatteryDoesNotExistError):
        battery.update()


def test_render_substitutes_and_colours(tmp_path):
    make_battery(tmp_path, status="Full", capacity="100", **CHARGE_FILES)
    battery = Battery("BAT0", sys_path=str(tmp_path))
    labels = BatteryLabels(state_full="FULL", full_color="#00FF00")
    result = render(battery, "%name %state %percent", labels)
    assert result == pango_markup("BAT0 FULL 100%", "#00FF00")


def test_render_low_threshold_colour(tmp_path):
    make_battery(tmp_path, status="Discharging", capacity="10", **ENERGY_FILES)
    battery = Battery("BAT0", sys_path=str(tmp_path))
    labels = BatteryLabels(
        low_threshold=20,
        low_threshold_color="#FFFF00",
        critical_threshold=5,
        critical_threshold_color="#FF0000",
    )
    assert render(battery, "%percent", labels) == pango_markup("10%", "#FFFF00")


def test_render_critical_threshold_colour(tmp_path):
    make_battery(tmp_path, status="Discharging", capacity="3", **ENERGY_FILES)
    battery = Battery("BAT0", sys_path=str(tmp_path))
    labels = BatteryLabels(
        low_threshold=20,
        low_threshold_color="#FFFF00",
        critical_threshold=5,
        critical_threshold_color="#FF0000",
    )
    assert render(battery, "%percent", labels) == pango_markup("3%", "#FF0000")


def test_render_thresholds_ignored_while_charging(tmp_path):
    make_battery(tmp_path, status="Charging", capacity="3", **CHARGE_FILES)
    battery = Battery("BAT0", sys_path=str(tmp_path))
    labels = BatteryLabels(
        charging_color="#0000FF",
        low_threshold=20,
        low_threshold_color="#FFFF00",
        critical_threshold=5,
        critical_threshold_color="#FF0000",
    )
    assert render(battery, "%state", labels) == pango_markup("Charging", "#0000FF")


def test_render_unrecognised_state_uses_unknown_colour(tmp_path):
    make_battery(tmp_path, status="Not charging", capacity="80", **CHARGE_FILES)
    battery = Battery("BAT0", sys_path=str(tmp_path))
    labels = BatteryLabels(unknown_color="#888888")
    assert render(battery, "%state", labels) == pango_markup("Not charging", "#888888")


def test_render_escapes_special_characters(tmp_path):
    make_battery(tmp_path, status="Full", capacity="100", **CHARGE_FILES)
    battery = Battery("BAT0", sys_path=str(tmp_path))
    labels = BatteryLabels(state_full="<ok & full>")
    result = render(battery, "%state", labels)
    assert "&lt;ok &amp; full&gt;" in result
    assert "<ok" not in result