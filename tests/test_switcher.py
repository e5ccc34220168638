"""
Tests for the WindowSwitcher focus cycle.
"""

import pytest

from stackwm.core.events import EventKind, WindowEvent
from stackwm.tiling.switcher import WindowSwitcher


@pytest.fixture
def switcher(host, manager):
    return WindowSwitcher(host, manager)


@pytest.fixture
def populated(manager, make_window, host):
    """U: main=A, others=[B]; floating P; workspace I holds X."""
    a, b = make_window(), make_window()
    p = make_window(title="Picture-in-Picture")
    for w in (a, b, p):
        manager.handle(WindowEvent(EventKind.CREATED, w))
    manager.switch_to("I")
    x = make_window()
    manager.handle(WindowEvent(EventKind.CREATED, x))
    manager.switch_to("U")
    host.reset_calls()
    return a, b, p, x


class TestCandidates:
    def test_order_is_main_stack_floating(self, switcher, populated):
        a, b, p, x = populated
        assert switcher.candidates() == [a, b, p]

    def test_matches_manager_candidates(self, switcher, manager, populated):
        assert switcher.candidates() == manager.switcher_candidates()

    def test_floating_window_unknown_to_host_is_candidate(
        self, switcher, manager, populated, host
    ):
        a, b, p, _ = populated
        host.all_windows.remove(p)

        assert switcher.candidates() == [a, b, p]

    def test_empty(self, switcher):
        assert switcher.candidates() == []
        assert switcher.next() is None
        assert switcher.previous() is None


class TestCycle:
    def test_next_wraps_around(self, switcher, populated, host):
        a, b, p, _ = populated
        host.focused = a

        assert switcher.next() == b
        assert switcher.next() == p
        assert switcher.next() == a
        assert host.focused == a

    def test_previous_wraps_around(self, switcher, populated, host):
        a, b, p, _ = populated
        host.focused = a

        assert switcher.previous() == p
        assert switcher.previous() == b

    def test_focused_not_candidate(self, switcher, populated, host):
        a, _, p, x = populated

        host.focused = x
        assert switcher.next() == a

        host.focused = x
        assert switcher.previous() == p

    def test_nothing_focused(self, switcher, populated, host):
        a, _, _, _ = populated
        host.focused = None

        assert switcher.next() == a

    def test_single_candidate_already_focused(self, switcher, manager, make_window, host):
        a = make_window()
        manager.handle(WindowEvent(EventKind.CREATED, a))
        host.focused = a
        a.reset_calls()

        assert switcher.next() is None
        assert a.count("focus") == 0
