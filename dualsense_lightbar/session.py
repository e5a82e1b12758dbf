"""USB/Bluetooth HID session driving the controller lightbar."""

import contextlib
import logging
from typing import NamedTuple

import hid

from dualsense_lightbar.color import Color
from dualsense_lightbar.protocol import Protocol, TransportMode

log = logging.getLogger(__name__)


class DeviceNotFoundError(OSError):
    """No HID device matches the protocol's vendor/product id."""


class TransportOpenError(OSError):
    """The device is present but could not be opened."""


class TransportWriteError(OSError):
    """A single report write failed."""


class SessionStats(NamedTuple):
    sent: int
    errors: int


class DeviceSession:
    """Owns an open HID handle and pushes lightbar reports through it.

    The transport mode is fixed at construction. Identical consecutive colors
    are written once; only successful writes update the last applied color.
    """

    def __init__(self, protocol: Protocol, device: "hid.device", mode: TransportMode) -> None:
        self._protocol = protocol
        self._device: hid.device | None = device
        self._mode = mode
        self._last_color: Color | None = None
        self._sent = 0
        self._errors = 0

    @classmethod
    def open(cls, protocol: Protocol) -> "DeviceSession":
        """Find the controller and open a session on it.

        Raises DeviceNotFoundError or TransportOpenError.
        """
        infos = hid.enumerate(protocol.vendor_id, protocol.product_id)
        if not infos:
            raise DeviceNotFoundError(
                f"{protocol.name} not found "
                f"(VID 0x{protocol.vendor_id:04X}, PID 0x{protocol.product_id:04X})"
            )

        info = infos[0]
        path = info["path"]
        try:
            dev = hid.device()
            dev.open_path(path)
        except (OSError, ValueError) as e:
            raise TransportOpenError(
                f"Failed to open {protocol.name} at {path.decode(errors='replace')}: {e}"
            ) from e

        interface = info.get("interface_number")
        mode = protocol.transport_mode(interface)
        log.info("%s found", protocol.name)
        log.info("  Mode: %s", mode.value)
        log.info("  Vendor ID: 0x%04X", protocol.vendor_id)
        log.info("  Product ID: 0x%04X", protocol.product_id)
        log.info("  Interface: %s", interface)
        log.debug("  Path: %s", path.decode(errors="replace"))
        return cls(protocol, dev, mode)

    @property
    def mode(self) -> TransportMode:
        return self._mode

    @property
    def last_color(self) -> Color | None:
        return self._last_color

    def stats(self) -> SessionStats:
        return SessionStats(self._sent, self._errors)

    def _write(self, report: bytes) -> None:
        """Write a report to the HID device. Raises TransportWriteError on failure."""
        if self._device is None:
            raise TransportWriteError("Device session closed")
        try:
            written = self._device.write(report)
        except (OSError, ValueError) as e:
            raise TransportWriteError(str(e)) from e
        if written is not None and written < 0:
            raise TransportWriteError(f"HID write returned {written}")

    def set_color(self, color: Color) -> None:
        """Set the lightbar color.

        No-op if `color` is the last successfully applied color.
        Raises TransportWriteError if the write fails.
        """
        if color == self._last_color:
            return

        report = self._protocol.encode(self._mode, color)
        try:
            self._write(report)
        except TransportWriteError:
            self._errors += 1
            raise

        self._last_color = color
        self._sent += 1
        log.debug("Lightbar set to %s (%d bytes, %s)", color, len(report), self._mode.value)

    def close(self) -> None:
        """Release the HID handle. Later writes fail with TransportWriteError."""
        device, self._device = self._device, None
        if device is None:
            return
        with contextlib.suppress(OSError):
            device.close()
        log.debug("HID handle released")
