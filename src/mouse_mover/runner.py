"""Helpers to wire up and run the mouse mover as a process."""

from __future__ import annotations

import logging
import signal
import threading
from typing import Any, Optional

from .config import MoverSettings
from .desktop import ActivityHook, PointerDevice, PyAutoGuiPointer
from .mover import IdleMover
from .tracker import ActivityTracker

logger = logging.getLogger(__name__)

_STOP_SIGNALS = ("SIGINT", "SIGTERM")


def build_mover(settings: MoverSettings, pointer: Optional[PointerDevice] = None) -> IdleMover:
    """Create the idle mover with screen bounds queried once at startup."""
    pointer = pointer or PyAutoGuiPointer(fail_safe=settings.fail_safe)
    bounds = pointer.screen_bounds()
    tracker = ActivityTracker(pointer.position())
    logger.debug("Screen bounds %dx%d.", bounds.width, bounds.height)
    return IdleMover(pointer=pointer, bounds=bounds, settings=settings, tracker=tracker)


def run_mover(
    settings: MoverSettings,
    *,
    pointer: Optional[PointerDevice] = None,
    stop_event: Optional[threading.Event] = None,
) -> IdleMover:
    """Run until a stop signal arrives; returns the mover for its counters."""
    mover = build_mover(settings, pointer)
    stop_event = stop_event or threading.Event()

    if settings.verbose:
        logging.getLogger("mouse_mover").setLevel(logging.DEBUG)
    logger.info(
        "Idle threshold %ss, checking every %ss, jitter %dpx, verbose %s.",
        settings.idle_threshold.total_seconds(),
        settings.poll_interval.total_seconds(),
        settings.jitter_pixels,
        "on" if settings.verbose else "off",
    )

    with ActivityHook(mover.report_activity) as hook:
        if not hook.running:
            logger.warning("Running in poll-only mode; keyboard input will not reset the idle timer.")
        previous = _install_signal_handlers(stop_event)
        logger.info("Press CTRL+C to stop.")
        try:
            mover.run_until_stopped(stop_event)
        finally:
            _restore_signal_handlers(previous)
    return mover


def _install_signal_handlers(stop_event: threading.Event) -> dict[int, Any]:
    previous: dict[int, Any] = {}
    if threading.current_thread() is not threading.main_thread():
        return previous

    def _request_stop(signum: int, _frame: object) -> None:
        logger.info("Received %s; stopping.", signal.Signals(signum).name)
        stop_event.set()

    for name in _STOP_SIGNALS:
        signum = getattr(signal, name, None)
        if signum is None:
            continue
        previous[signum] = signal.signal(signum, _request_stop)
    return previous


def _restore_signal_handlers(previous: dict[int, Any]) -> None:
    for signum, handler in previous.items():
        signal.signal(signum, handler)
