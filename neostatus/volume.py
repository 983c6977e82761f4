"""Volume block: device selection, update signalling and output rendering."""

from __future__ import annotations

import abc
import enum
import threading
from dataclasses import dataclass

from neostatus.common import pango_markup, replace_all

DEFAULT_DEVICE = "_default_"
DEFAULT_SINK_NAME = "@DEFAULT_SINK@"
DEFAULT_MIXER_NAME = "Master"


class Status(enum.Enum):
    """Lifecycle state of a volume source."""

    STARTING = "starting"
    RUNNING = "running"
    STOPPED = "stopped"


class IdType(enum.Enum):
    """How a sound-server sink is identified."""

    STRING = "string"
    NUM = "num"


@dataclass(frozen=True)
class DeviceId:
    """A sound-server sink, named or numbered."""

    type: IdType = IdType.STRING
    value: str | int = DEFAULT_SINK_NAME


@dataclass(frozen=True)
class AlsaDevice:
    """An ALSA simple mixer element, by name and index."""

    mixer_name: str = DEFAULT_MIXER_NAME
    mixer_index: int = 0


class Volume(abc.ABC):
    """A source of volume information that signals when it has changed."""

    def __init__(self) -> None:
        self._updated = False
        self._condition = threading.Condition()

    @property
    @abc.abstractmethod
    def volume(self) -> int:
        """Volume as a whole percentage."""

    @property
    @abc.abstractmethod
    def muted(self) -> bool:
        """Whether the output is muted."""

    @property
    @abc.abstractmethod
    def description(self) -> str:
        """Human-readable name of the device."""

    @property
    @abc.abstractmethod
    def status(self) -> Status:
        """Current lifecycle state."""

    @property
    @abc.abstractmethod
    def last_error(self) -> str:
        """Message of the most recent error, or "" when there is none."""

    def notify_updated(self) -> None:
        """Mark the information as changed and wake any waiters."""
        with self._condition:
            self._updated = True
            self._condition.notify_all()

    def wait_for_update(self, timeout: float | None = None) -> bool:
        """Wait until an update is signalled, then clear it.

        Returns False if the timeout passed with no update.
        """
        with self._condition:
            if not self._condition.wait_for(lambda: self._updated, timeout):
                return False
            self._updated = False
            return True


def is_numeric(text: str) -> bool:
    """Return whether every character of text is an ASCII digit."""
    return all(char in "0123456789" for char in text)


def parse_device_id(volume_api: str, device_id: str = DEFAULT_DEVICE) -> DeviceId | AlsaDevice:
    """Turn the `volume_api` and `device_id` settings into a device description."""
    if volume_api == "pulseaudio":
        if device_id == DEFAULT_DEVICE:
            return DeviceId()
        if is_numeric(device_id):
            return DeviceId(IdType.NUM, int(device_id))
        return DeviceId(IdType.STRING, device_id)

    if volume_api == "alsa":
        if device_id == DEFAULT_DEVICE:
            return AlsaDevice()
        name, comma, index = device_id.partition(",")
        if not comma:
            return AlsaDevice(device_id)
        if not is_numeric(index):
            raise ValueError(
                f'invalid `device_id` for `alsa`: "{device_id}"; '
                "try `mixer_name` or `mixer_name,mixer_index`"
            )
        return AlsaDevice(name, int(index))

    raise ValueError(
        f'invalid volume_api value: "{volume_api}"; options are "pulseaudio" or "alsa"'
    )


def render(
    volume: Volume,
    output_format: str,
    output_format_muted: str,
    color_normal: str,
    color_muted: str,
) -> str:
    """Return the block's Pango markup for the volume source."""
    muted = volume.muted
    full_text = output_format_muted if muted else output_format
    for placeholder, value in (
        ("%volume", f"{volume.volume}%"),
        ("%muted", "True" if muted else "False"),
        ("%devicename", volume.description),
    ):
        full_text = replace_all(full_text, placeholder, value)
    return pango_markup(full_text, color_muted if muted else color_normal)