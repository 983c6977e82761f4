"""Status-bar blocks for i3bar and i3blocks, with the helpers behind them."""

__version__ = "0.1.0"

__all__ = [
    "backlight",
    "battery",
    "common",
    "ethernet",
    "hide_block",
    "i3bar_types",
    "network",
    "volume",
    "wireless",
]