"""Main entry point: the timed rainbow effect loop."""

import logging
import signal
import sys
import time

from dualsense_lightbar.color import ANSI_RESET, Color
from dualsense_lightbar.config import Config
from dualsense_lightbar.effect import FrameCounter, RainbowCycle
from dualsense_lightbar.protocol import DEFAULT_PROTOCOL_KEY, load_protocol
from dualsense_lightbar.session import (
    DeviceNotFoundError,
    DeviceSession,
    TransportOpenError,
    TransportWriteError,
)

log = logging.getLogger(__name__)


def _paint(label: str, tag: str) -> str:
    """Prefix a band label with a colored dot when logging to a terminal."""
    if sys.stderr.isatty():
        return f"{tag}●{ANSI_RESET} {label}"
    return label


class Daemon:
    """Drives the rainbow cycle through a device session at a fixed frame rate."""

    def __init__(self, config: Config, session: DeviceSession) -> None:
        self._config = config
        self._session = session
        self._cycle = RainbowCycle(config.hue_step)
        now = time.monotonic()
        self._started = now
        self._counter = FrameCounter(now)
        self._running = True

    def _on_shutdown(self, signum: int, _frame: object) -> None:
        sig_name = signal.Signals(signum).name
        log.info("Received %s, stopping effect", sig_name)
        self._running = False

    def stop(self) -> None:
        """Ask the loop to exit after the current frame."""
        self._running = False

    def _log_stats(self, color: Color, now: float) -> None:
        elapsed = int(now - self._started)
        sent, errors = self._session.stats()
        label, tag = self._cycle.band()
        log.info(
            "[%02d:%02d] %s | RGB: %s | Sent: %d | Errors: %d | FPS: %.1f",
            elapsed // 60,
            elapsed % 60,
            _paint(label, tag),
            color,
            sent,
            errors,
            self._counter.fps(now),
        )

    def run_frame(self) -> None:
        """Run one iteration: write the current color, report, advance, pace."""
        frame_start = time.monotonic()
        color = self._cycle.color()

        try:
            self._session.set_color(color)
        except TransportWriteError as e:
            log.error("Lightbar write failed: %s", e)
            time.sleep(self._config.error_backoff)
        else:
            self._counter.tick()

        now = time.monotonic()
        if self._counter.elapsed(now) >= self._config.stats_interval:
            self._log_stats(color, now)
            self._counter.reset(now)

        self._cycle.advance()

        # Frames that overrun are not made up
        remaining = self._config.frame_interval - (time.monotonic() - frame_start)
        if remaining > 0:
            time.sleep(remaining)

    def run(self) -> None:
        """Main loop. Runs until SIGINT/SIGTERM."""
        log.info(
            "Starting effect (%s, target_fps=%.1f, hue_step=%.2f)",
            self._session.mode.value,
            self._config.target_fps,
            self._config.hue_step,
        )
        log.info("Press CTRL+C to exit")

        signal.signal(signal.SIGTERM, self._on_shutdown)
        signal.signal(signal.SIGINT, self._on_shutdown)

        while self._running:
            self.run_frame()

        sent, errors = self._session.stats()
        self._session.close()
        log.info("Effect stopped (sent=%d, errors=%d)", sent, errors)


def main() -> None:
    """Entry point."""
    try:
        config = Config.load()
    except ValueError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        sys.exit(1)

    config.setup_logging()
    log.info("DualSense Rainbow Lightbar")

    protocol = load_protocol(DEFAULT_PROTOCOL_KEY)
    log.info("Searching for %s...", protocol.name)
    try:
        session = DeviceSession.open(protocol)
    except (DeviceNotFoundError, TransportOpenError) as e:
        log.error("%s", e)
        sys.exit(1)

    Daemon(config, session).run()


if __name__ == "__main__":
    main()
