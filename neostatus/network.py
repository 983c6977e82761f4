"""Network interface discovery, link state and IPv4 address lookup."""

from __future__ import annotations

import os
import socket

import psutil

from neostatus.common import read_first_line_of_file

DEFAULT_SYS_NET_PATH = "/sys/class/net"
_LOOPBACK = "lo"


class NetworkError(RuntimeError):
    """Raised when information about a network interface cannot be acquired."""


def _ipv4_addresses(name: str, addresses) -> list[str]:
    return [addr.address for addr in addresses if addr.family == socket.AF_INET]


def find_interface(is_wireless: bool, sys_net_path: str = DEFAULT_SYS_NET_PATH) -> str:
    """Return the first non-loopback IPv4 interface of the requested kind, or ""."""
    for name, addresses in psutil.net_if_addrs().items():
        if name == _LOOPBACK or not _ipv4_addresses(name, addresses):
            continue
        wireless_dir = os.path.join(sys_net_path, name, "wireless")
        if os.path.isdir(wireless_dir) == is_wireless:
            return name
    return ""


def read_is_up(interface: str, sys_net_path: str = DEFAULT_SYS_NET_PATH) -> bool:
    """Return whether the interface's operational state is "up"."""
    sys_path = os.path.join(sys_net_path, interface)
    if not os.path.isdir(sys_path) and not os.path.islink(sys_path):
        raise NetworkError("cannot acquire state information")
    try:
        operstate = read_first_line_of_file(os.path.join(sys_path, "operstate"))
    except OSError as exc:
        raise NetworkError("cannot acquire state information") from exc
    if operstate == "down":
        return False
    if operstate == "up":
        return True
    raise NetworkError("cannot acquire state information")


def read_ip(interface: str) -> str:
    """Return the first IPv4 address assigned to the interface."""
    addresses = psutil.net_if_addrs().get(interface)
    if addresses:
        found = _ipv4_addresses(interface, addresses)
        if found:
            return found[0]
    raise NetworkError("cannot acquire IP information")


class Network:
    """State of one network interface, refreshed by update().

    When no interface is given, the first one of the matching kind is picked
    on the next update and kept from then on.
    """

    is_wireless = False

    def __init__(self, interface: str = "", sys_net_path: str = DEFAULT_SYS_NET_PATH) -> None:
        self.interface = interface
        self.sys_net_path = sys_net_path
        self.is_up = False
        self.ip = ""

    def update(self) -> None:
        """Refresh the interface state, retrying until it is read consistently."""
        while True:
            try:
                self._refresh()
            except NetworkError:
                continue
            return

    def _refresh(self) -> None:
        if not self.interface:
            self.interface = find_interface(self.is_wireless, self.sys_net_path)
            if not self.interface:
                self._mark_down()
                return
        self.is_up = read_is_up(self.interface, self.sys_net_path)
        if not self.is_up:
            self._mark_down()
            return
        self._read_details()

    def _mark_down(self) -> None:
        self.is_up = False
        self.ip = ""

    def _read_details(self) -> None:
        self.ip = read_ip(self.interface)