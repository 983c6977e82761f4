import socket
import struct
from types import SimpleNamespace
from unittest import mock

import pytest

from neostatus.wireless import Wireless, _frequency_from_iwreq, render


def _addr(address):
    return SimpleNamespace(family=socket.AF_INET, address=address)


def _make_iface(root, name, operstate, wireless=True):
    iface = root / name
    iface.mkdir()
    (iface / "operstate").write_text(operstate + "\n")
    if wireless:
        (iface / "wireless").mkdir()


@pytest.fixture
def down_wireless(tmp_path):
    _make_iface(tmp_path, "wlan0", "down")
    with mock.patch("psutil.net_if_addrs", return_value={}):
        wireless = Wireless("wlan0", sys_net_path=str(tmp_path))
    yield wireless
    wireless.close()


def test_down_interface_clears_details(down_wireless):
    assert down_wireless.is_up is False
    assert down_wireless.ip == ""
    assert down_wireless.essid == ""
    assert down_wireless.frequency == 0
    assert down_wireless.quality == 0


def test_autodetect_picks_wireless_interface(tmp_path):
    _make_iface(tmp_path, "eth0", "down", wireless=False)
    _make_iface(tmp_path, "wlan0", "down")
    addrs = {
        "lo": [_addr("127.0.0.1")],
        "eth0": [_addr("192.0.2.10")],
        "wlan0": [_addr("192.0.2.20")],
    }
    with mock.patch("psutil.net_if_addrs", return_value=addrs):
        with Wireless(sys_net_path=str(tmp_path)) as wireless:
            assert wireless.interface == "wlan0"
            assert wireless.is_up is False


def test_no_wireless_interface(tmp_path):
    _make_iface(tmp_path, "eth0", "up", wireless=False)
    with mock.patch("psutil.net_if_addrs", return_value={"eth0": [_addr("192.0.2.10")]}):
        with Wireless(sys_net_path=str(tmp_path)) as wireless:
            assert wireless.interface == ""
            assert wireless.is_up is False


def test_formatted_values(down_wireless):
    down_wireless.frequency = 2.412e9
    down_wireless.quality = 73.6
    assert down_wireless.formatted_frequency() == "2.4 GHz"
    assert down_wireless.formatted_quality() == "74%"


def test_frequency_from_iwreq_round_trip():
    data = b"wlan0".ljust(16, b"\0") + struct.pack("ihBB", 2412, 6, 0, 0).ljust(16, b"\0")
    assert _frequency_from_iwreq(data) == pytest.approx(2412e6)
    data_plain = b"wlan0".ljust(16, b"\0") + struct.pack("ihBB", 11, 0, 0, 0).ljust(16, b"\0")
    assert _frequency_from_iwreq(data_plain) == 11.0


def test_render_down(down_wireless):
    assert render(down_wireless, "W: %ip", "W: down", "#FFF", 50, "#FF0", "#F00") == (
        "<span color='#F00'>W: down</span>"
    )


def test_render_up_quality_colors(down_wireless):
    down_wireless.is_up = True
    down_wireless.ip = "192.0.2.20"
    down_wireless.essid = "home"
    down_wireless.frequency = 5e9
    down_wireless.quality = 40.0
    fmt = "%essid %ip %quality"
    low = render(down_wireless, fmt, "down", "#FFF", 50, "#FF0", "#F00")
    assert low.startswith("<span color='#FF0'>")
    assert "home 192.0.2.20 40%" in low

    down_wireless.quality = 80.0
    high = render(down_wireless, fmt, "down", "#FFF", 50, "#FF0", "#F00")
    assert high == "<span color='#FFF'>home 192.0.2.20 80%</span>"


def test_close_releases_socket(tmp_path):
    _make_iface(tmp_path, "wlan0", "down")
    with mock.patch("psutil.net_if_addrs", return_value={}):
        with Wireless("wlan0", sys_net_path=str(tmp_path)) as wireless:
            assert wireless._socket.fileno() >= 0
    assert wireless._socket.fileno() == -1