import threading

import pytest

from mouse_mover.config import MoverSettings
from mouse_mover.desktop import PointerError
from mouse_mover.models import Point, ScreenBounds


class FakeClock:
    """Monotonic clock advanced by hand."""

    def __init__(self, start=0.0):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


class FakePointer:
    def __init__(self, position=(500, 500), bounds=(1920, 1080), fail_after=None):
        self.current = Point(*position)
        self.bounds = ScreenBounds(*bounds)
        self.moves = []
        self.fail_after = fail_after

    def position(self):
        return self.current

    def move_to(self, point):
        if self.fail_after is not None and len(self.moves) >= self.fail_after:
            raise PointerError("display went away")
        self.moves.append(point)
        self.current = Point(*point)

    def screen_bounds(self):
        return self.bounds


class SimulatedStopEvent:
    """Stop event whose waits advance a FakeClock instead of sleeping."""

    def __init__(self, clock, stop_at=None):
        self.clock = clock
        self.stop_at = stop_at
        self.waits = []
        self._flag = threading.Event()

    def is_set(self):
        return self._flag.is_set()

    def set(self):
        self._flag.set()

    def wait(self, timeout=None):
        self.waits.append(timeout)
        self.clock.advance(timeout or 0)
        if self.stop_at is not None and self.clock.now >= self.stop_at:
            self._flag.set()
        return self._flag.is_set()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def pointer():
    return FakePointer()


@pytest.fixture
def settings():
    return MoverSettings.from_intervals(idle_seconds=30, interval_seconds=5, jitter_pixels=1)
