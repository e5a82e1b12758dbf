"""Lightbar output report definitions.

Each Protocol instance holds the USB identification of a controller model and
the byte layout of its lightbar output report for each transport. Layout data
is loaded from protocols.yaml.

A report is zero-filled, starts with the report id, then the flag bytes, then
R, G, B at the color offset. Bluetooth reports end with a little-endian
CRC-32 of everything before the checksum offset.
"""

import enum
import functools
from dataclasses import dataclass
from pathlib import Path

import yaml

from dualsense_lightbar.checksum import crc32
from dualsense_lightbar.color import Color

_PROTOCOLS_FILE = Path(__file__).parent / "protocols.yaml"

DEFAULT_PROTOCOL_KEY = "dualsense"


class TransportMode(enum.Enum):
    USB = "USB"
    BLUETOOTH = "Bluetooth"


@dataclass(frozen=True)
class ReportLayout:
    """Byte layout of the lightbar report on one transport."""

    report_id: int
    length: int
    flags: tuple[int, ...]
    color_offset: int
    checksum_offset: int | None = None  # CRC-32 trailer, Bluetooth only

    def __post_init__(self) -> None:
        object.__setattr__(self, "flags", tuple(self.flags))
        if self.color_offset + 3 > self.length:
            raise ValueError(f"Color offset {self.color_offset} outside report of {self.length}")
        if self.checksum_offset is not None and self.checksum_offset + 4 != self.length:
            raise ValueError(
                f"Checksum must fill the last 4 bytes, got offset {self.checksum_offset}"
            )

    def encode(self, color: Color) -> bytes:
        """Build the report for a color."""
        report = bytearray(self.length)
        report[0] = self.report_id
        report[1:1 + len(self.flags)] = bytes(self.flags)
        report[self.color_offset:self.color_offset + 3] = bytes((color.r, color.g, color.b))

        if self.checksum_offset is not None:
            crc = crc32(report[:self.checksum_offset])
            report[self.checksum_offset:] = crc.to_bytes(4, "little")

        return bytes(report)


@dataclass(frozen=True)
class Protocol:
    """Identification and report layouts for a controller model."""

    name: str
    vendor_id: int
    product_id: int
    usb_interface: int
    usb: ReportLayout
    bluetooth: ReportLayout

    def transport_mode(self, interface_number: int | None) -> TransportMode:
        """Classify the transport from the HID interface number."""
        if interface_number == self.usb_interface:
            return TransportMode.USB
        return TransportMode.BLUETOOTH

    def layout(self, mode: TransportMode) -> ReportLayout:
        if mode is TransportMode.USB:
            return self.usb
        return self.bluetooth

    def encode(self, mode: TransportMode, color: Color) -> bytes:
        """Build the lightbar report for a color on the given transport."""
        return self.layout(mode).encode(color)


@functools.lru_cache(maxsize=None)
def _protocol_table() -> dict[str, dict]:
    return yaml.safe_load(_PROTOCOLS_FILE.read_text())


def load_protocol(key: str) -> Protocol:
    """Build the Protocol for a controller key in protocols.yaml.

    Raises KeyError listing the known keys if `key` is missing.
    """
    table = _protocol_table()
    if key not in table:
        raise KeyError(f"Unknown protocol '{key}'. Available: {', '.join(sorted(table))}")

    entry = table[key]
    layouts = {transport: ReportLayout(**entry[transport]) for transport in ("usb", "bluetooth")}
    return Protocol(**{**entry, **layouts})
