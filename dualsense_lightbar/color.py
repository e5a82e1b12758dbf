"""Color model: HSV to 8-bit RGB conversion and hue band labels."""

import math
import struct
from dataclasses import dataclass

ANSI_RESET = "\x1b[0m"

# (upper bound of integer hue, label, ANSI tag); checked in order
_BANDS = (
    (30, "Red", "\x1b[31m"),
    (90, "Yellow", "\x1b[33m"),
    (150, "Green", "\x1b[32m"),
    (210, "Cyan", "\x1b[36m"),
    (270, "Blue", "\x1b[34m"),
    (330, "Magenta", "\x1b[35m"),
)


@dataclass(frozen=True)
class Color:
    """An 8-bit-per-channel RGB color."""

    r: int
    g: int
    b: int

    def __post_init__(self) -> None:
        for name in ("r", "g", "b"):
            value = getattr(self, name)
            if not (0 <= value <= 255):
                raise ValueError(f"Channel {name} must be 0-255, got {value}")

    def __str__(self) -> str:
        return f"({self.r:3d},{self.g:3d},{self.b:3d})"


def _f32(value: float) -> float:
    """Round a float to the nearest IEEE 754 single-precision value."""
    return struct.unpack("f", struct.pack("f", value))[0]


def wrap_hue(hue: float) -> float:
    """Wrap a hue angle into [0, 360)."""
    return _f32(hue) % 360.0


def _channel(component: float, m: float) -> int:
    """Scale a [0, 1] component to 0-255, truncating and saturating."""
    scaled = _f32(_f32(component + m) * 255.0)
    return max(0, min(255, int(scaled)))


def hsv_to_rgb(hue: float, saturation: float, value: float) -> Color:
    """Convert HSV to RGB.

    `hue` must already be in [0, 360). Every intermediate is rounded to
    single precision and channels are truncated, not rounded.
    """
    hue, saturation, value = _f32(hue), _f32(saturation), _f32(value)
    chroma = _f32(value * saturation)
    sector = math.fmod(_f32(hue / 60.0), 2.0)
    x = _f32(chroma * _f32(1.0 - abs(_f32(sector - 1.0))))
    m = _f32(value - chroma)

    if hue < 60.0:
        r, g, b = chroma, x, 0.0
    elif hue < 120.0:
        r, g, b = x, chroma, 0.0
    elif hue < 180.0:
        r, g, b = 0.0, chroma, x
    elif hue < 240.0:
        r, g, b = 0.0, x, chroma
    elif hue < 300.0:
        r, g, b = x, 0.0, chroma
    else:
        r, g, b = chroma, 0.0, x

    return Color(_channel(r, m), _channel(g, m), _channel(b, m))


def color_band_name(hue: float) -> tuple[str, str]:
    """Return the (label, ANSI tag) of the color band a hue falls into."""
    degrees = int(hue)
    if degrees >= 0:
        for upper, label, tag in _BANDS:
            if degrees <= upper:
                return label, tag
    # 331-359 wraps back to red
    return _BANDS[0][1], _BANDS[0][2]
