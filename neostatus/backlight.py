"""Backlight brightness block."""

from __future__ import annotations

import enum
import math
import os
import signal
import sys
import threading

from neostatus.common import (
    get_env,
    get_env_extra_empties,
    pango_markup,
    print_pango_markup,
    read_first_line_of_file,
    replace_all,
    write_one_line_to_file,
)

DEFAULT_SYS_PATH = "/sys/class/backlight"


class DecimalFormat(enum.Enum):
    """How many decimals to show for the brightness percentage."""

    ALWAYS = "always"
    NEVER = "never"
    AUTOMATIC = "auto"


class NoBacklightDeviceError(RuntimeError):
    """Raised when no usable backlight device exists."""

    def __init__(self) -> None:
        super().__init__("No backlight device found")


def _round_half_away(value: float) -> int:
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


class Backlight:
    """A backlight device and its brightness as a percentage of its maximum."""

    def __init__(self, device_name: str = "", sys_path: str = DEFAULT_SYS_PATH) -> None:
        if not device_name:
            entries = sorted(os.listdir(sys_path))
            if not entries:
                raise NoBacklightDeviceError()
            device_name = entries[0]
        self.device_name = device_name
        self.device_path = os.path.join(sys_path, device_name)
        self.brightness = -1.0
        self.update()

    def _check_device_exists(self) -> None:
        if not os.path.isdir(self.device_path) and not os.path.islink(self.device_path):
            raise NoBacklightDeviceError()

    def _read_value(self, name: str) -> float:
        return float(read_first_line_of_file(os.path.join(self.device_path, name)))

    def update(self) -> None:
        """Re-read the current brightness from the device."""
        self._check_device_exists()
        actual = self._read_value("brightness")
        maximum = self._read_value("max_brightness")
        self.brightness = actual / maximum * 100

    def formatted_brightness(self, decimal_format: DecimalFormat) -> str:
        """Return the brightness as a percentage string."""
        if decimal_format is DecimalFormat.AUTOMATIC:
            if self.brightness == math.floor(self.brightness):
                decimal_format = DecimalFormat.NEVER
            else:
                decimal_format = DecimalFormat.ALWAYS
        if decimal_format is DecimalFormat.NEVER:
            return f"{_round_half_away(self.brightness)}%"
        return f"{self.brightness:.2f}%"

    def set_brightness(self, brightness: float) -> None:
        """Write a brightness given as a percentage of the maximum."""
        maximum = self._read_value("max_brightness")
        actual = brightness / 100 * maximum
        write_one_line_to_file(
            os.path.join(self.device_path, "brightness"), str(_round_half_away(actual))
        )


def parse_decimal_format(value: str) -> DecimalFormat:
    """Parse the `decimals` setting."""
    try:
        return DecimalFormat(value)
    except ValueError:
        raise ValueError(
            "invalid `decimals` setting; valid options are `always`, `never`, and `auto`"
        ) from None


def render(
    backlight: Backlight, output_format: str, color: str, decimal_format: DecimalFormat
) -> str:
    """Return the block's Pango markup for the backlight."""
    full_text = replace_all(
        output_format, "%brightness", backlight.formatted_brightness(decimal_format)
    )
    return pango_markup(full_text, color)


def _report_error(message: str) -> int:
    print(message, file=sys.stderr)
    print_pango_markup(message, "#FF0000")
    return 1


def main(argv=None) -> int:
    """Print the backlight block once a second, or at once on SIGUSR1."""
    wake = threading.Event()
    try:
        signal.signal(signal.SIGUSR1, lambda signum, frame: wake.set())

        device = get_env_extra_empties("backlight_device", "", ["_default_"])
        output_format = get_env("output_format", "%brightness")
        color = get_env("color", "#FFFFFF")
        decimal_format = parse_decimal_format(get_env("decimals", "never"))

        backlight = Backlight(device)
        while True:
            backlight.update()
            print(render(backlight, output_format, color, decimal_format), flush=True)
            wake.wait(1)
            wake.clear()
    except NoBacklightDeviceError:
        print_pango_markup(
            get_env("output_format_down", "No backlight"), get_env("color_down", "#FFFFFF")
        )
        threading.Event().wait()
        return 0
    except Exception as exc:  # noqa: BLE001 - report any failure in the block
        return _report_error(f"Error: {exc}")


if __name__ == "__main__":
    sys.exit(main())