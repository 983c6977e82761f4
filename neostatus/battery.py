"""Battery charge, state and remaining-time block."""

from __future__ import annotations

import math
import os
import sys
import threading
from dataclasses import dataclass

from neostatus.common import (
    get_env,
    pango_markup,
    print_pango_markup,
    read_first_line_of_file,
    replace_all,
)

DEFAULT_SYS_PATH = "/sys/class/power_supply"

_CHARGE_AND_CURRENT = ("charge_full", "charge_full_design", "charge_now", "current_now")
_ENERGY_AND_POWER = ("energy_full", "energy_full_design", "energy_now", "power_now")


class BatteryDoesNotExistError(RuntimeError):
    """Raised when the named battery is not present."""

    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.name = name
        self.message = "battery does not exist"

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class BatteryLabels:
    """Display names and colours for each battery state, and the charge thresholds."""

    state_full: str = "Full"
    full_color: str = "#FFFFFF"
    state_charging: str = "Charging"
    charging_color: str = "#FFFFFF"
    state_discharging: str = "Discharging"
    discharging_color: str = "#FFFFFF"
    state_unknown: str = "Unknown"
    unknown_color: str = "#FFFFFF"
    low_threshold: int = 0
    low_threshold_color: str = "#FFFFFF"
    critical_threshold: int = 0
    critical_threshold_color: str = "#FFFFFF"


def _round_half_away(value: float) -> int:
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def _divide(numerator: float, denominator: float) -> float:
    if denominator == 0:
        return math.inf if numerator else math.nan
    return numerator / denominator


class Battery:
    """A battery's state, charge percentage and estimated hours to full or empty."""

    def __init__(self, name: str = "BAT0", sys_path: str = DEFAULT_SYS_PATH) -> None:
        self.name = name
        self.sys_path = sys_path
        self.state = ""
        self.percent = 0
        self.time = 0.0
        self.update()

    @property
    def _path(self) -> str:
        return os.path.join(self.sys_path, self.name)

    def _read(self, attribute: str) -> str:
        return read_first_line_of_file(os.path.join(self._path, attribute))

    def _read_float(self, attribute: str) -> float:
        return float(self._read(attribute))

    def _read_float_nonempty(self, attribute: str) -> float:
        while True:
            text = self._read(attribute)
            if text:
                return float(text)

    def _has_all(self, attributes: tuple[str, ...]) -> bool:
        return all(
            os.path.isfile(os.path.join(self._path, attribute))
            or os.path.islink(os.path.join(self._path, attribute))
            for attribute in attributes
        )

    def update(self) -> None:
        """Re-read the battery's state, charge and remaining time."""
        if not os.path.isdir(self._path):
            raise BatteryDoesNotExistError(self.name)

        self.state = self._read("status")
        self.percent = _round_half_away(self._read_float("capacity"))

        if self._has_all(_CHARGE_AND_CURRENT):
            full, now, rate = "charge_full", "charge_now", "current_now"
        elif self._has_all(_ENERGY_AND_POWER):
            full, now, rate = "energy_full", "energy_now", "power_now"
        else:
            raise RuntimeError("unable to find all attributes required for time calculation")

        if self.state == "Charging":
            remaining = self._read_float(full) - self._read_float(now)
            self.time = _divide(remaining, self._read_float(rate))
        elif self.state == "Discharging":
            stored = self._read_float(now)
            self.time = _divide(stored, self._read_float_nonempty(rate))
        else:
            self.time = 0.0

    def formatted_percent(self) -> str:
        """Return the charge as a whole percentage string."""
        return f"{_round_half_away(self.percent)}%"

    def formatted_time(self) -> str:
        """Return the remaining time as H:MM, or "" when it is a minute or less."""
        if not math.isfinite(self.time) or self.time <= 1 / 60:
            return ""
        hours = int(self.time)
        minutes = _round_half_away((self.time - hours) * 60)
        return f"{hours}:{minutes:02d}"


def render(battery: Battery, output_format: str, labels: BatteryLabels) -> str:
    """Return the block's Pango markup for the battery."""
    state = {
        "Full": labels.state_full,
        "Charging": labels.state_charging,
        "Discharging": labels.state_discharging,
        "Unknown": labels.state_unknown,
    }.get(battery.state, battery.state)

    full_text = output_format
    for placeholder, value in (
        ("%name", battery.name),
        ("%state", state),
        ("%percent", battery.formatted_percent()),
        ("%time", battery.formatted_time()),
    ):
        full_text = replace_all(full_text, placeholder, value)

    if state == labels.state_full:
        color = labels.full_color
    elif state == labels.state_charging:
        color = labels.charging_color
    elif state == labels.state_discharging:
        color = labels.discharging_color
    else:
        color = labels.unknown_color

    if state == labels.state_discharging:
        if labels.critical_threshold < battery.percent <= labels.low_threshold:
            color = labels.low_threshold_color
        elif battery.percent <= labels.critical_threshold:
            color = labels.critical_threshold_color

    return pango_markup(full_text, color)


def _labels_from_env() -> BatteryLabels:
    return BatteryLabels(
        state_full=get_env("state_full", "Full"),
        full_color=get_env("full_color", "#FFFFFF"),
        state_charging=get_env("state_charging", "Charging"),
        charging_color=get_env("charging_color", "#FFFFFF"),
        state_discharging=get_env("state_discharging", "Discharging"),
        discharging_color=get_env("discharging_color", "#FFFFFF"),
        state_unknown=get_env("state_unknown", "Unknown"),
        unknown_color=get_env("unknown_color", "#FFFFFF"),
        low_threshold=int(get_env("low_threshold", "0")),
        low_threshold_color=get_env("low_threshold_color", "#FFFFFF"),
        critical_threshold=int(get_env("critical_threshold", "0")),
        critical_threshold_color=get_env("critical_threshold_color", "#FFFFFF"),
    )


def _report_error(message: str) -> int:
    print(message, file=sys.stderr)
    print_pango_markup(message, "#FF0000")
    return 1


def main(argv=None) -> int:
    """Print the battery block once a second."""
    stop = threading.Event()
    try:
        name = get_env("bat_name", "BAT0")
        output_format = get_env("output_format", "%state %percent %time")
        labels = _labels_from_env()

        battery = Battery(name)
        while True:
            battery.update()
            print(render(battery, output_format, labels), flush=True)
            stop.wait(1)
    except BatteryDoesNotExistError:
        print_pango_markup(
            get_env("output_format_down", "No battery"), get_env("color_down", "#FFFFFF")
        )
        threading.Event().wait()
        return 0
    except Exception as exc:  # noqa: BLE001 - report any failure in the block
        return _report_error(f"Error: {exc}")


if __name__ == "__main__":
    sys.exit(main())