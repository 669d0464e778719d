"""Idle loop: watch for inactivity and play back synthesized motion."""

from __future__ import annotations

import logging
import threading
import time
from typing import Callable, Optional

from .config import MoverSettings
from .desktop import PointerDevice, PointerError
from .models import MotionPlan, ScreenBounds
from .motion import MotionSynthesizer
from .tracker import ActivityTracker

logger = logging.getLogger(__name__)


class IdleMover:
    """Polls for idleness at a fixed interval and moves the pointer when idle."""

    def __init__(
        self,
        pointer: PointerDevice,
        bounds: ScreenBounds,
        settings: MoverSettings,
        tracker: Optional[ActivityTracker] = None,
        synthesizer: Optional[MotionSynthesizer] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.pointer = pointer
        self.bounds = bounds
        self.settings = settings
        self._clock = clock
        self.tracker = tracker or ActivityTracker(pointer.position(), now=clock(), clock=clock)
        self.synthesizer = synthesizer or MotionSynthesizer()
        self.episodes = 0
        self.failed_episodes = 0
        self._playing = threading.Event()

    def run_until_stopped(self, stop_event: threading.Event) -> None:
        """Run the mover until the provided event is set."""
        try:
            self._run_loop(stop_event)
        finally:
            self._shutdown()

    def tick(self, stop_event: threading.Event) -> bool:
        """Check idleness once; returns True when an episode was played back."""
        now = self._clock()
        current = self.pointer.position()
        self.tracker.observe_pointer(current, now)

        idle = self.tracker.idle_duration(now)
        threshold = self.settings.idle_threshold.total_seconds()
        if idle < threshold:
            logger.debug("Idle for %.1fs of %.1fs.", idle, threshold)
            return False

        logger.info("Idle for %.1fs; moving the pointer.", idle)
        plan = self.synthesizer.plan(current, self.bounds, self.settings.jitter_pixels)
        if not self.play(plan, stop_event):
            self._sync_after_abandon()
            return False

        self.episodes += 1
        self.tracker.reset(self._clock(), self.pointer.position())
        return True

    def play(self, plan: MotionPlan, stop_event: threading.Event) -> bool:
        """Move through every step of ``plan``; False if stopped or abandoned."""
        self._playing.set()
        try:
            return self._play_steps(plan, stop_event)
        finally:
            self._playing.clear()

    def report_activity(self) -> None:
        """Input hook callback; events caused by our own playback are ignored."""
        if self._playing.is_set():
            return
        self.tracker.record_activity()

    def _play_steps(self, plan: MotionPlan, stop_event: threading.Event) -> bool:
        for index, step in enumerate(plan):
            if stop_event.is_set():
                logger.debug("Stop requested; abandoning movement at step %d.", index)
                return False
            try:
                self.pointer.move_to(step.point)
            except PointerError as exc:
                self.failed_episodes += 1
                logger.error("Abandoning movement at step %d/%d: %s", index + 1, len(plan), exc)
                return False
            if stop_event.wait(step.delay_ms / 1000.0):
                logger.debug("Stop requested; abandoning movement at step %d.", index + 1)
                return False
        logger.debug(
            "Movement finished at (%d,%d) after %d steps (%d ms).",
            plan.end.x,
            plan.end.y,
            len(plan),
            plan.total_delay_ms,
        )
        return True

    def _sync_after_abandon(self) -> None:
        # The partial path is ours, not the user's; only the clock is left alone.
        try:
            self.tracker.sync_pointer(self.pointer.position())
        except PointerError as exc:
            logger.error("Could not read pointer after abandoned movement: %s", exc)

    def _run_loop(self, stop_event: threading.Event) -> None:
        logger.info("Mouse mover started. Waiting for idle state...")
        interval = self.settings.poll_interval.total_seconds()
        while not stop_event.is_set():
            try:
                self.tick(stop_event)
            except Exception:
                logger.exception("Idle check failed; retrying on the next tick.")
            # Sleep in an interruptible manner.
            stop_event.wait(interval)

    def _shutdown(self) -> None:
        logger.info(
            "Mouse mover stopped after %d movement(s), %d failed.",
            self.episodes,
            self.failed_episodes,
        )
