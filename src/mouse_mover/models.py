"""Domain models for pointer positions and synthesized movement."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, NamedTuple


class Point(NamedTuple):
    x: int
    y: int


@dataclass(frozen=True, slots=True)
class ScreenBounds:
    """Size of the single rectangle the pointer may be moved within."""

    width: int
    height: int

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Invalid screen bounds {self.width}x{self.height}")


@dataclass(frozen=True, slots=True)
class MotionStep:
    point: Point
    delay_ms: int


@dataclass(frozen=True, slots=True)
class MotionPlan:
    """An ordered path from ``start`` towards ``target``.

    The final step is not guaranteed to land on ``target``: per-step
    displacement is truncated and every step carries jitter.
    """

    start: Point
    target: Point
    steps: tuple[MotionStep, ...]

    def __len__(self) -> int:
        return len(self.steps)

    def __iter__(self) -> Iterator[MotionStep]:
        return iter(self.steps)

    @property
    def end(self) -> Point:
        return self.steps[-1].point if self.steps else self.start

    @property
    def total_delay_ms(self) -> int:
        return sum(step.delay_ms for step in self.steps)
