"""Single source of truth for when the user was last active."""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from typing import Callable, Optional

from .models import Point

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ActivityState:
    last_activity: float
    last_pointer: Point


class ActivityTracker:
    """Tracks user activity reported by input hooks and pointer polling.

    Two producers feed the same timestamp: the global input hook (on its own
    listener threads) and the driver loop comparing pointer positions. Both
    only ever move the timestamp forward, so a lock around each access is
    enough and the last write wins.

    Timestamps are plain floats from ``clock`` (``time.monotonic`` by
    default). Every operation accepts an explicit ``now`` so the tracker can
    be driven by simulated time.
    """

    def __init__(
        self,
        pointer: Point,
        now: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._clock = clock
        self._lock = threading.Lock()
        self._state = ActivityState(
            last_activity=clock() if now is None else now,
            last_pointer=Point(*pointer),
        )

    @property
    def last_activity(self) -> float:
        with self._lock:
            return self._state.last_activity

    @property
    def last_pointer(self) -> Point:
        with self._lock:
            return self._state.last_pointer

    def record_activity(self, now: Optional[float] = None) -> None:
        if now is None:
            now = self._clock()
        with self._lock:
            # A racing writer may arrive with an older reading.
            if now > self._state.last_activity:
                self._state.last_activity = now

    def observe_pointer(self, current: Point, now: Optional[float] = None) -> bool:
        """Record activity if the pointer moved since the last observation."""
        if now is None:
            now = self._clock()
        current = Point(*current)
        with self._lock:
            if current == self._state.last_pointer:
                return False
            self._state.last_pointer = current
            if now > self._state.last_activity:
                self._state.last_activity = now
        logger.debug("Pointer moved to (%d,%d), resetting idle timer.", *current)
        return True

    def idle_duration(self, now: Optional[float] = None) -> float:
        if now is None:
            now = self._clock()
        with self._lock:
            return now - self._state.last_activity

    def reset(self, now: Optional[float] = None, pointer: Optional[Point] = None) -> None:
        """Restart the idle clock after the mover injected its own motion."""
        if now is None:
            now = self._clock()
        with self._lock:
            if now > self._state.last_activity:
                self._state.last_activity = now
            if pointer is not None:
                self._state.last_pointer = Point(*pointer)

    def sync_pointer(self, pointer: Point) -> None:
        """Adopt ``pointer`` as the last known position without counting it as activity."""
        with self._lock:
            self._state.last_pointer = Point(*pointer)
