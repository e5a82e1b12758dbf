"""Configuration parsing from /etc/default/dualsense-lightbar and CLI arguments."""

import argparse
import logging
import os
from dataclasses import dataclass

from dotenv import dotenv_values

DEFAULT_CONFIG_PATH = "/etc/default/dualsense-lightbar"
VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def _parse_cli_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="dualsense-lightbar",
        description="Rainbow lightbar effect for the DualSense controller",
    )
    parser.add_argument(
        "--fps",
        type=float,
        help="Target frame rate of the effect loop",
    )
    parser.add_argument(
        "--hue-step",
        type=float,
        help="Hue advance per frame in degrees",
    )
    parser.add_argument(
        "--stats-interval",
        type=float,
        help="Seconds between stats lines",
    )
    parser.add_argument(
        "--error-backoff",
        type=float,
        help="Pause in seconds after a failed write",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        default=None,
        help="Enable debug logging",
    )
    parser.add_argument(
        "--log-level",
        choices=VALID_LOG_LEVELS,
        help="Log level (overrides config file)",
    )
    return parser.parse_args(argv)


@dataclass
class Config:
    """Effect and logging configuration."""

    target_fps: float = 60.0
    hue_step: float = 1.5
    stats_interval: float = 2.0
    error_backoff: float = 0.1
    log_level: str = "INFO"
    debug: bool = False

    def __post_init__(self) -> None:
        if self.target_fps <= 0:
            raise ValueError(f"Target FPS must be positive, got {self.target_fps}")

        if not (0 < self.hue_step < 360):
            raise ValueError(f"Hue step must be in (0, 360), got {self.hue_step}")

        if self.stats_interval <= 0:
            raise ValueError(f"Stats interval must be positive, got {self.stats_interval}")

        if self.error_backoff < 0:
            raise ValueError(f"Error backoff must not be negative, got {self.error_backoff}")

        if self.debug:
            self.log_level = "DEBUG"

        if self.log_level not in VALID_LOG_LEVELS:
            raise ValueError(
                f"Invalid log level '{self.log_level}'. Must be one of: {', '.join(VALID_LOG_LEVELS)}"
            )

    @property
    def frame_interval(self) -> float:
        """Target duration of one frame in seconds."""
        return 1.0 / self.target_fps

    @classmethod
    def load(cls, argv: list[str] | None = None) -> "Config":
        """Load configuration from environment file, env vars, and CLI args.

        Priority (highest to lowest):
        1. CLI arguments
        2. Environment variables
        3. /etc/default/dualsense-lightbar file
        4. Dataclass defaults
        """
        file_env = {k: v for k, v in dotenv_values(DEFAULT_CONFIG_PATH).items() if v is not None}

        def env(key: str) -> str | None:
            if key in os.environ:
                return os.environ[key]
            return file_env.get(key)

        kwargs: dict[str, object] = {}

        for key, field in (
            ("TARGET_FPS", "target_fps"),
            ("HUE_STEP", "hue_step"),
            ("STATS_INTERVAL", "stats_interval"),
            ("ERROR_BACKOFF", "error_backoff"),
        ):
            if (v := env(key)) is not None:
                try:
                    kwargs[field] = float(v)
                except ValueError:
                    pass

        if (v := env("LOG_LEVEL")) is not None:
            kwargs["log_level"] = v.upper()

        if (v := env("DEBUG")) is not None:
            kwargs["debug"] = v.lower() in ("true", "1", "yes")

        # CLI arguments override everything
        args = _parse_cli_args(argv)

        if args.fps is not None:
            kwargs["target_fps"] = args.fps

        if args.hue_step is not None:
            kwargs["hue_step"] = args.hue_step

        if args.stats_interval is not None:
            kwargs["stats_interval"] = args.stats_interval

        if args.error_backoff is not None:
            kwargs["error_backoff"] = args.error_backoff

        if args.log_level is not None:
            kwargs["log_level"] = args.log_level

        if args.debug is True:
            kwargs["debug"] = True

        return cls(**kwargs)

    def setup_logging(self) -> None:
        """Configure logging based on this config."""
        logging.basicConfig(
            level=getattr(logging, self.log_level),
            format="[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
