"""Operating system collaborators: the pointer and global input hooks.

``pyautogui`` and ``pynput`` talk to the display server as soon as they are
imported, so both are imported when a collaborator is created rather than at
module import time.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional, Protocol

from .models import Point, ScreenBounds

logger = logging.getLogger(__name__)


class PointerError(RuntimeError):
    """Raised when the pointer cannot be queried or moved."""


class PointerDevice(Protocol):
    def position(self) -> Point: ...

    def move_to(self, point: Point) -> None: ...

    def screen_bounds(self) -> ScreenBounds: ...


class PyAutoGuiPointer:
    """Reads and moves the system pointer through pyautogui."""

    def __init__(self, fail_safe: bool = False) -> None:
        try:
            import pyautogui
        except Exception as exc:
            raise PointerError(f"Cannot access the display: {exc}") from exc

        # Step delays are the only pacing; pyautogui's own pause would skew them.
        pyautogui.PAUSE = 0
        pyautogui.FAILSAFE = fail_safe
        self._pyautogui = pyautogui

    def position(self) -> Point:
        try:
            x, y = self._pyautogui.position()
        except Exception as exc:
            raise PointerError(f"Failed to read pointer position: {exc}") from exc
        return Point(int(x), int(y))

    def move_to(self, point: Point) -> None:
        try:
            self._pyautogui.moveTo(point.x, point.y)
        except Exception as exc:
            raise PointerError(f"Failed to move pointer to ({point.x},{point.y}): {exc}") from exc

    def screen_bounds(self) -> ScreenBounds:
        try:
            width, height = self._pyautogui.size()
        except Exception as exc:
            raise PointerError(f"Failed to query screen size: {exc}") from exc
        return ScreenBounds(width=int(width), height=int(height))


class ActivityHook:
    """Global keyboard and mouse listeners reporting any input as activity.

    Registration can fail (no display, missing accessibility permission).
    ``start`` logs the failure and returns False instead of raising so the
    caller can carry on with pointer polling alone.
    """

    def __init__(self, on_activity: Callable[[], None]) -> None:
        self._on_activity = on_activity
        self._mouse_listener: Optional[Any] = None
        self._keyboard_listener: Optional[Any] = None

    @property
    def running(self) -> bool:
        return self._mouse_listener is not None or self._keyboard_listener is not None

    def start(self) -> bool:
        if self.running:
            return True
        try:
            from pynput import keyboard, mouse

            logging.getLogger("pynput").setLevel(logging.WARNING)
            self._mouse_listener = mouse.Listener(
                on_move=self._handle_event,
                on_click=self._handle_event,
                on_scroll=self._handle_event,
            )
            self._keyboard_listener = keyboard.Listener(
                on_press=self._handle_event,
                on_release=self._handle_event,
            )
            self._mouse_listener.start()
            self._keyboard_listener.start()
        except Exception as exc:
            logger.warning(
                "Could not register global input hook (%s); relying on pointer polling.",
                exc,
            )
            self.stop()
            return False
        logger.debug("Global input hook registered.")
        return True

    def stop(self) -> None:
        for listener in (self._mouse_listener, self._keyboard_listener):
            if listener is None:
                continue
            try:
                listener.stop()
            except Exception:
                logger.exception("Failed to stop input listener.")
        self._mouse_listener = None
        self._keyboard_listener = None

    def _handle_event(self, *_args: object) -> None:
        logger.debug("Mouse/keyboard activity detected globally, resetting idle timer.")
        self._on_activity()

    def __enter__(self) -> "ActivityHook":
        self.start()
        return self

    def __exit__(self, *_exc: object) -> None:
        self.stop()
