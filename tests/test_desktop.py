import sys
from unittest.mock import MagicMock, patch

import pytest

from mouse_mover.desktop import ActivityHook, PointerError, PyAutoGuiPointer
from mouse_mover.models import Point, ScreenBounds


@pytest.fixture
def fake_pyautogui():
    module = MagicMock()
    module.position.return_value = (12, 34)
    module.size.return_value = (1920, 1080)
    with patch.dict(sys.modules, {"pyautogui": module}):
        yield module


@pytest.fixture
def fake_pynput():
    module = MagicMock()
    with patch.dict(sys.modules, {"pynput": module}):
        yield module


class TestPyAutoGuiPointer:
    """Test the pyautogui-backed pointer."""

    def test_disables_pause_and_sets_fail_safe(self, fake_pyautogui):
        PyAutoGuiPointer(fail_safe=True)
        assert fake_pyautogui.PAUSE == 0
        assert fake_pyautogui.FAILSAFE is True

    def test_position_and_bounds(self, fake_pyautogui):
        pointer = PyAutoGuiPointer()
        assert pointer.position() == Point(12, 34)
        assert pointer.screen_bounds() == ScreenBounds(1920, 1080)

    def test_move_to(self, fake_pyautogui):
        PyAutoGuiPointer().move_to(Point(5, 6))
        fake_pyautogui.moveTo.assert_called_once_with(5, 6)

    def test_move_failure_raises_pointer_error(self, fake_pyautogui):
        fake_pyautogui.moveTo.side_effect = RuntimeError("fail-safe triggered")
        with pytest.raises(PointerError, match="fail-safe triggered"):
            PyAutoGuiPointer().move_to(Point(0, 0))

    def test_position_failure_raises_pointer_error(self, fake_pyautogui):
        fake_pyautogui.position.side_effect = OSError("no display")
        with pytest.raises(PointerError):
            PyAutoGuiPointer().position()


class TestActivityHook:
    """Test global input hook registration."""

    def test_start_registers_listeners(self, fake_pynput):
        hook = ActivityHook(MagicMock())
        assert hook.start() is True
        assert hook.running
        fake_pynput.mouse.Listener.return_value.start.assert_called_once()
        fake_pynput.keyboard.Listener.return_value.start.assert_called_once()

    def test_events_report_activity(self, fake_pynput):
        on_activity = MagicMock()
        ActivityHook(on_activity).start()
        mouse_kwargs = fake_pynput.mouse.Listener.call_args.kwargs
        keyboard_kwargs = fake_pynput.keyboard.Listener.call_args.kwargs

        mouse_kwargs["on_move"](10, 20)
        mouse_kwargs["on_click"](10, 20, "left", True)
        mouse_kwargs["on_scroll"](10, 20, 0, -1)
        keyboard_kwargs["on_press"]("a")
        keyboard_kwargs["on_release"]("a")

        assert on_activity.call_count == 5

    def test_registration_failure_is_not_fatal(self, fake_pynput):
        fake_pynput.keyboard.Listener.return_value.start.side_effect = OSError("denied")
        hook = ActivityHook(MagicMock())
        assert hook.start() is False
        assert not hook.running
        fake_pynput.mouse.Listener.return_value.stop.assert_called_once()

    def test_stop_stops_listeners(self, fake_pynput):
        hook = ActivityHook(MagicMock())
        hook.start()
        hook.stop()
        assert not hook.running
        fake_pynput.mouse.Listener.return_value.stop.assert_called_once()
        fake_pynput.keyboard.Listener.return_value.stop.assert_called_once()

    def test_context_manager(self, fake_pynput):
        with ActivityHook(MagicMock()) as hook:
            assert hook.running
        assert not hook.running
