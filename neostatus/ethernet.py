"""Wired network block: link state and IPv4 address."""

from __future__ import annotations

import sys
import threading

from neostatus.common import (
    get_env,
    get_env_extra_empties,
    pango_markup,
    print_pango_markup,
    replace_all,
)
from neostatus.network import DEFAULT_SYS_NET_PATH, Network


class Ethernet(Network):
    """A wired interface; without a name, the first wired IPv4 interface is used."""

    is_wireless = False

    def __init__(self, interface: str = "", sys_net_path: str = DEFAULT_SYS_NET_PATH) -> None:
        super().__init__(interface, sys_net_path)
        self.update()

    def update(self) -> None:
        """Refresh the link state and address."""
        super().update()


def render(
    ethernet: Ethernet,
    output_format: str,
    output_format_down: str,
    color_regular: str,
    color_down: str,
) -> str:
    """Return the block's Pango markup for the wired interface."""
    if ethernet.is_up:
        full_text = replace_all(output_format, "%ip", ethernet.ip)
        color = color_regular
    else:
        full_text = output_format_down
        color = color_down
    return pango_markup(full_text, color)


def _report_error(message: str) -> int:
    print(message, file=sys.stderr)
    print_pango_markup(message, "#FF0000")
    return 1


def main(argv=None) -> int:
    """Print the wired network block once a second."""
    stop = threading.Event()
    try:
        interface = get_env_extra_empties("interface", "", ["_default_"])
        output_format = get_env("output_format", "E: %ip")
        output_format_down = get_env("output_format_down", "E: down")
        color_regular = get_env("color_regular", "#FFFFFF")
        color_down = get_env("color_down", "#FFFFFF")

        ethernet = Ethernet(interface)
        while True:
            ethernet.update()
            print(
                render(ethernet, output_format, output_format_down, color_regular, color_down),
                flush=True,
            )
            stop.wait(1)
    except Exception as exc:  # noqa: BLE001 - report any failure in the block
        return _report_error(f"Error: {exc}")


if __name__ == "__main__":
    sys.exit(main())