# neostatus

Small status blocks for i3bar / i3blocks on Linux. Each block reads its
values from `/sys` or the network stack, prints one line of Pango markup
such as

    <span color='#FFFFFF'>E: 192.168.1.10</span>

and refreshes once a second.

## Installation

    pip install .

To run the test suite:

    pip install .[test]
    pytest

## Blocks

| Command               | Shows                                        |
|-----------------------|----------------------------------------------|
| `neostatus-backlight` | screen brightness in percent                 |
| `neostatus-battery`   | battery state, charge and time remaining     |
| `neostatus-ethernet`  | IPv4 address of the wired interface          |
| `neostatus-wireless`  | link quality, ESSID, frequency and address   |

Every block is configured through environment variables, which is how
i3blocks passes per-block settings. A minimal i3blocks entry:

    [battery]
    command=neostatus-battery
    interval=persist
    markup=pango
    bat_name=BAT0
    low_threshold=20
    low_threshold_color=#FFAA00

### Backlight

- `backlight_device` – device under `/sys/class/backlight`; empty or
  `_default_` picks the first one in sorted order.
- `output_format` – default `%brightness`.
- `color` – default `#FFFFFF`.
- `decimals` – `never` (default), `always` or `auto`.
- `output_format_down`, `color_down` – shown when there is no backlight
  device (default `No backlight`).

Sending `SIGUSR1` makes the block refresh at once instead of waiting for
the next second.

### Battery

- `bat_name` – default `BAT0`.
- `output_format` – default `%state %percent %time`; also knows `%name`.
- `state_full`, `state_charging`, `state_discharging`, `state_unknown` –
  labels for each state, with matching `full_color`, `charging_color`,
  `discharging_color`, `unknown_color`.
- `low_threshold`, `low_threshold_color`, `critical_threshold`,
  `critical_threshold_color` – colours used while discharging.
- `output_format_down`, `color_down` – shown when the battery does not
  exist (default `No battery`).

The remaining time (`%time`) is shown as `H:MM`, and left empty when it is
a minute or less.

### Ethernet

- `interface` – empty or `_default_` picks the first non-loopback, wired
  interface with an IPv4 address.
- `output_format` – default `E: %ip`.
- `output_format_down` – default `E: down`.
- `color_regular`, `color_down` – both default `#FFFFFF`.

### Wireless

- `interface` – empty or `_default_` picks the first wireless interface
  with an IPv4 address.
- `output_format` – default `W: (%quality at %essid %frequency) %ip`.
- `output_format_down` – default `W: down`.
- `threshold_low_quality` (default `50`), `color_low_quality`,
  `color_regular`, `color_down`.

## Errors

When a block cannot run, it writes `Error: <message>` to standard error,
prints the same text in red as its block and exits with status 1.

## Library use

The pieces behind the blocks can be used directly:

- `neostatus.common` – file and shell-command helpers, environment
  lookup (`get_env`, `get_env_extra_empties`), `escape_pango`,
  `pango_markup`, `replace_all`, `program_exists_in_path` and
  `approximately_equal`.
- `neostatus.network` – `Network`, `find_interface`, `read_is_up`,
  `read_ip` and `NetworkError`.
- `neostatus.backlight`, `neostatus.battery`, `neostatus.ethernet`,
  `neostatus.wireless` – the device classes and a `render` function that
  returns one block's markup.
- `neostatus.i3bar_types` – `TextAlign`, `Markup`, `ClickModifiers`,
  `to_string` and `click_modifiers_from_string`.
- `neostatus.hide_block` – `hidden_full_text()` and `is_hidden()` for the
  marker text that hides a block.

```python
from neostatus.common import pango_markup
from neostatus.i3bar_types import ClickModifiers, click_modifiers_from_string

print(pango_markup("a < b", "#FF0000"))
mods = click_modifiers_from_string(["Shift", "Mod4"])
assert ClickModifiers.SHIFT in mods
```

## What is not included

There is no volume command. `neostatus.volume` provides the abstract
`Volume` base class with its update signalling (`notify_updated`,
`wait_for_update`), the `parse_device_id` function for the `volume_api`
and `device_id` settings, and `render`, but no class that talks to a
sound server or mixer. To show volume, subclass `Volume` with your own
backend.