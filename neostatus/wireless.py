"""Wireless network block: ESSID, frequency, link quality and IPv4 address."""

from __future__ import annotations

import array
import fcntl
import math
import socket
import struct
import sys
import threading

from neostatus.common import (
    get_env,
    get_env_extra_empties,
    pango_markup,
    print_pango_markup,
    replace_all,
)
from neostatus.network import DEFAULT_SYS_NET_PATH, Network, NetworkError

_SIOCGIWFREQ = 0x8B05
_SIOCGIWRANGE = 0x8B0B
_SIOCGIWSTATS = 0x8B0F
_SIOCGIWESSID = 0x8B1B

_IFNAMSIZ = 16
_IWREQ_DATA_SIZE = 16
_IW_ESSID_MAX_SIZE = 32
_IW_STATISTICS_SIZE = 32
_IW_RANGE_BUFFER_SIZE = 4096
_STATS_QUAL_OFFSET = 2
_RANGE_MAX_QUAL_OFFSET = 44
_IW_FREQ = struct.Struct("ihBB")


def _round_half_away(value: float) -> int:
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def _iwreq(interface: str, payload: bytes = b"") -> bytes:
    name = interface.encode()[: _IFNAMSIZ - 1]
    return struct.pack(f"{_IFNAMSIZ}s", name) + payload.ljust(_IWREQ_DATA_SIZE, b"\0")


def _iwreq_point(interface: str, buffer: array.array) -> bytes:
    address, length = buffer.buffer_info()
    return _iwreq(interface, struct.pack("PHH", address, length, 0))


def _frequency_from_iwreq(data: bytes) -> float:
    mantissa, exponent, _index, _flags = _IW_FREQ.unpack_from(data, _IFNAMSIZ)
    if exponent == 0:
        return float(mantissa)
    return mantissa * 10.0**exponent


class Wireless(Network):
    """A wireless interface; without a name, the first wireless IPv4 interface is used."""

    is_wireless = True

    def __init__(self, interface: str = "", sys_net_path: str = DEFAULT_SYS_NET_PATH) -> None:
        super().__init__(interface, sys_net_path)
        self.essid = ""
        self.frequency = 0.0
        self.quality = 0.0
        try:
            self._socket = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        except OSError as exc:
            raise NetworkError("cannot open socket") from exc
        try:
            self.update()
        except BaseException:
            self.close()
            raise

    def __enter__(self) -> Wireless:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        """Release the socket used for wireless queries."""
        self._socket.close()

    def update(self) -> None:
        """Refresh link state, address and radio details."""
        super().update()

    def formatted_frequency(self) -> str:
        """Return the frequency in GHz with one decimal."""
        return f"{self.frequency / 1e9:.1f} GHz"

    def formatted_quality(self) -> str:
        """Return the link quality as a whole percentage string."""
        return f"{_round_half_away(self.quality)}%"

    def _mark_down(self) -> None:
        super()._mark_down()
        self.essid = ""
        self.frequency = 0.0
        self.quality = 0.0

    def _read_details(self) -> None:
        super()._read_details()
        self.essid = self._read_essid()
        self.frequency = self._read_frequency()
        self.quality = self._read_quality()

    def _ioctl(self, request: int, data: bytes, message: str) -> bytes:
        try:
            return fcntl.ioctl(self._socket.fileno(), request, data)
        except OSError as exc:
            raise NetworkError(message) from exc

    def _read_essid(self) -> str:
        buffer = array.array("B", bytes(_IW_ESSID_MAX_SIZE + 1))
        self._ioctl(
            _SIOCGIWESSID,
            _iwreq_point(self.interface, buffer),
            "cannot acquire ESSID information",
        )
        raw = buffer.tobytes().split(b"\0", 1)[0]
        return raw.decode("utf-8", errors="replace")

    def _read_frequency(self) -> float:
        result = self._ioctl(
            _SIOCGIWFREQ, _iwreq(self.interface), "cannot acquire frequency information"
        )
        return _frequency_from_iwreq(result)

    def _read_quality(self) -> float:
        stats = array.array("B", bytes(_IW_STATISTICS_SIZE))
        self._ioctl(
            _SIOCGIWSTATS,
            _iwreq_point(self.interface, stats),
            "cannot acquire quality information",
        )
        quality = stats[_STATS_QUAL_OFFSET]

        limits = array.array("B", bytes(_IW_RANGE_BUFFER_SIZE))
        self._ioctl(
            _SIOCGIWRANGE,
            _iwreq_point(self.interface, limits),
            "cannot acquire quality information",
        )
        max_quality = limits[_RANGE_MAX_QUAL_OFFSET]
        if max_quality == 0:
            return 0.0
        return quality / max_quality * 100


def render(
    wireless: Wireless,
    output_format: str,
    output_format_down: str,
    color_regular: str,
    threshold_low_quality: float,
    color_low_quality: str,
    color_down: str,
) -> str:
    """Return the block's Pango markup for the wireless interface."""
    if not wireless.is_up:
        return pango_markup(output_format_down, color_down)

    color = color_low_quality if wireless.quality <= threshold_low_quality else color_regular
    full_text = output_format
    for placeholder, value in (
        ("%ip", wireless.ip),
        ("%essid", wireless.essid),
        ("%frequency", wireless.formatted_frequency()),
        ("%quality", wireless.formatted_quality()),
    ):
        full_text = replace_all(full_text, placeholder, value)
    return pango_markup(full_text, color)


def _report_error(message: str) -> int:
    print(message, file=sys.stderr)
    print_pango_markup(message, "#FF0000")
    return 1


def main(argv=None) -> int:
    """Print the wireless network block once a second."""
    stop = threading.Event()
    try:
        interface = get_env_extra_empties("interface", "", ["_default_"])
        output_format = get_env("output_format", "W: (%quality at %essid %frequency) %ip")
        output_format_down = get_env_extra_empties("output_format_down", "W: down")
        color_regular = get_env("color_regular", "#FFFFFF")
        threshold_low_quality = float(get_env("threshold_low_quality", "50"))
        color_low_quality = get_env("color_low_quality", "#FFFFFF")
        color_down = get_env("color_down", "#FFFFFF")

        with Wireless(interface) as wireless:
            while True:
                wireless.update()
                print(
                    render(
                        wireless,
                        output_format,
                        output_format_down,
                        color_regular,
                        threshold_low_quality,
                        color_low_quality,
                        color_down,
                    ),
                    flush=True,
                )
                stop.wait(1)
    except Exception as exc:  # noqa: BLE001 - report any failure in the block
        return _report_error(f"Error: {exc}")


if __name__ == "__main__":
    sys.exit(main())