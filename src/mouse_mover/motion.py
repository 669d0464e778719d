"""Human-looking pointer paths."""

from __future__ import annotations

import logging
import random
from typing import Optional

from .models import MotionPlan, MotionStep, Point, ScreenBounds

logger = logging.getLogger(__name__)

MIN_STEPS = 30
STEP_SPREAD = 40
MIN_STEP_DELAY_MS = 10
STEP_DELAY_SPREAD_MS = 30


def truncating_div(numerator: int, denominator: int) -> int:
    """Integer division rounding toward zero rather than toward -inf."""
    quotient = abs(numerator) // abs(denominator)
    return quotient if (numerator >= 0) == (denominator > 0) else -quotient


class MotionSynthesizer:
    """Plans a jittered, unevenly timed drag from the pointer to a random spot.

    All randomness is drawn from ``rng``; pass a seeded ``random.Random`` for
    reproducible plans. The synthesizer keeps no other state, so one
    instance may be shared.
    """

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self._rng = rng or random.Random()

    def choose_target(self, bounds: ScreenBounds) -> Point:
        return Point(self._rng.randrange(bounds.width), self._rng.randrange(bounds.height))

    def choose_step_count(self) -> int:
        return MIN_STEPS + self._rng.randrange(STEP_SPREAD)

    def choose_delay_ms(self) -> int:
        return MIN_STEP_DELAY_MS + self._rng.randrange(STEP_DELAY_SPREAD_MS)

    def jitter(self, jitter_pixels: int) -> int:
        return self._rng.randint(-jitter_pixels, jitter_pixels)

    def plan(self, start: Point, bounds: ScreenBounds, jitter_pixels: int) -> MotionPlan:
        if jitter_pixels < 0:
            raise ValueError("jitter_pixels must not be negative")

        start = Point(*start)
        target = self.choose_target(bounds)
        count = self.choose_step_count()
        dx = truncating_div(target.x - start.x, count)
        dy = truncating_div(target.y - start.y, count)
        logger.debug(
            "Moving mouse from (%d,%d) to (%d,%d) in %d steps",
            start.x,
            start.y,
            target.x,
            target.y,
            count,
        )

        x, y = start
        steps: list[MotionStep] = []
        for _ in range(count):
            x += dx + self.jitter(jitter_pixels)
            y += dy + self.jitter(jitter_pixels)
            steps.append(MotionStep(point=Point(x, y), delay_ms=self.choose_delay_ms()))
        return MotionPlan(start=start, target=target, steps=tuple(steps))
