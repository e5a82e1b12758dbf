"""Rainbow hue cycle and frame-rate bookkeeping."""

from dualsense_lightbar.color import Color, color_band_name, hsv_to_rgb, wrap_hue

SATURATION = 1.0
VALUE = 1.0


class RainbowCycle:
    """Walks the hue wheel by a fixed step per frame at full saturation and value."""

    def __init__(self, step: float, hue: float = 0.0) -> None:
        self._step = step
        self._hue = wrap_hue(hue)

    @property
    def hue(self) -> float:
        return self._hue

    def color(self) -> Color:
        return hsv_to_rgb(self._hue, SATURATION, VALUE)

    def band(self) -> tuple[str, str]:
        return color_band_name(self._hue)

    def advance(self) -> float:
        """Step the hue forward, wrapping at 360, and return it."""
        self._hue = wrap_hue(self._hue + self._step)
        return self._hue


class FrameCounter:
    """Counts delivered frames over a reporting interval.

    The realized rate divides by the actual elapsed time, not the nominal
    interval.
    """

    def __init__(self, now: float) -> None:
        self._frames = 0
        self._since = now

    @property
    def frames(self) -> int:
        return self._frames

    def tick(self) -> None:
        self._frames += 1

    def elapsed(self, now: float) -> float:
        return now - self._since

    def fps(self, now: float) -> float:
        elapsed = self.elapsed(now)
        if elapsed <= 0:
            return 0.0
        return self._frames / elapsed

    def reset(self, now: float) -> None:
        self._frames = 0
        self._since = now
