"""Configuration models and helpers for the mouse mover."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta


@dataclass(slots=True)
class MoverSettings:
    """Runtime configuration for the idle mover."""

    idle_threshold: timedelta = timedelta(seconds=30)
    poll_interval: timedelta = timedelta(seconds=5)
    jitter_pixels: int = 1
    verbose: bool = False
    fail_safe: bool = False

    def __post_init__(self) -> None:
        if self.idle_threshold <= timedelta(0):
            raise ValueError("idle_threshold must be positive")
        if self.poll_interval <= timedelta(0):
            raise ValueError("poll_interval must be positive")
        if self.jitter_pixels < 0:
            raise ValueError("jitter_pixels must not be negative")

    @classmethod
    def from_intervals(
        cls,
        idle_seconds: float,
        interval_seconds: float,
        jitter_pixels: int = 1,
        verbose: bool = False,
        fail_safe: bool = False,
    ) -> "MoverSettings":
        return cls(
            idle_threshold=timedelta(seconds=idle_seconds),
            poll_interval=timedelta(seconds=interval_seconds),
            jitter_pixels=jitter_pixels,
            verbose=verbose,
            fail_safe=fail_safe,
        )
