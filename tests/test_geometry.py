"""
Unit tests for frame computation and the hide position.

All scenarios use a 1200x800 screen and a 5px margin:
usable width 1185, usable height 790, half width 592.
"""

import pytest

from conftest import FakeWindow
from stackwm.tiling.geometry import compute_frames, hidden_frame
from stackwm.tiling.layout import Layout
from stackwm.tiling.rect import Rect

SCREEN = Rect(0, 0, 1200, 800)
MARGIN = 5


def _layout(*windows: FakeWindow) -> Layout:
    layout = Layout()
    for w in windows:
        layout.insert(w)
    return layout


class TestComputeFrames:
    def test_empty_layout(self):
        assert compute_frames(Layout(), SCREEN, MARGIN) == {}

    def test_main_alone_takes_full_width(self):
        a = FakeWindow(1)
        frames = compute_frames(_layout(a), SCREEN, MARGIN)

        assert frames == {a: Rect(5, 5, 1185, 790)}

    def test_main_with_one_stack_window(self):
        a, b = FakeWindow(1), FakeWindow(2)
        frames = compute_frames(_layout(a, b), SCREEN, MARGIN)

        assert frames[a] == Rect(603, 5, 592, 790)
        assert frames[b] == Rect(5, 5, 592, 790)

    def test_two_stack_slots(self):
        a, b, c = FakeWindow(1), FakeWindow(2), FakeWindow(3)
        frames = compute_frames(_layout(a, b, c), SCREEN, MARGIN)

        assert frames[b] == Rect(5, 5, 592, 392)
        assert frames[c] == Rect(5, 402, 592, 392)

    def test_main_comes_first(self):
        a, b, c = FakeWindow(1), FakeWindow(2), FakeWindow(3)
        frames = compute_frames(_layout(a, b, c), SCREEN, MARGIN)

        assert list(frames) == [a, b, c]

    def test_enlarged_main(self):
        a, b = FakeWindow(1), FakeWindow(2)
        layout = _layout(a, b)
        layout.toggle_enlarge(a)

        frames = compute_frames(layout, SCREEN, MARGIN)

        # floor(1185 * 0.9) = 1066, still right-aligned
        assert frames[a] == Rect(129, 5, 1066, 790)
        assert frames[b] == Rect(5, 5, 592, 790)

    def test_enlarged_main_alone_ignores_enlarge(self):
        a = FakeWindow(1)
        layout = _layout(a)
        layout.toggle_enlarge(a)

        assert compute_frames(layout, SCREEN, MARGIN)[a] == Rect(5, 5, 1185, 790)

    def test_enlarged_stack_window(self):
        a, b, c = FakeWindow(1), FakeWindow(2), FakeWindow(3)
        layout = _layout(a, b, c)
        layout.toggle_enlarge(c)

        frames = compute_frames(layout, SCREEN, MARGIN)

        assert frames[c] == Rect(5, 5, 1066, 790)
        assert frames[b] == Rect(5, 5, 592, 392)
        assert frames[a] == Rect(603, 5, 592, 790)

    def test_custom_enlarge_ratio(self):
        a, b = FakeWindow(1), FakeWindow(2)
        layout = _layout(a, b)
        layout.toggle_enlarge(a)

        frames = compute_frames(layout, SCREEN, MARGIN, enlarge_ratio=0.5)

        assert frames[a].w == 592

    def test_screen_origin_offsets_stack_and_y(self):
        screen = Rect(0, 40, 1200, 760)
        a, b = FakeWindow(1), FakeWindow(2)

        frames = compute_frames(_layout(a, b), screen, MARGIN)

        assert frames[a] == Rect(603, 45, 592, 750)
        assert frames[b] == Rect(5, 45, 592, 750)

    @pytest.mark.parametrize("n", [1, 2, 3, 5, 7])
    def test_stack_slots_stay_on_screen(self, n):
        windows = [FakeWindow(i) for i in range(n + 1)]
        frames = compute_frames(_layout(*windows), SCREEN, MARGIN)

        for w in windows[1:]:
            frame = frames[w]
            assert frame.x == 5 and frame.w == 592
            assert frame.bottom <= SCREEN.bottom


class TestHiddenFrame:
    def test_moves_to_bottom_right_keeping_size(self):
        current = Rect(603, 5, 592, 790)

        assert hidden_frame(current, SCREEN) == Rect(1199, 799, 592, 790)

    def test_respects_screen_origin(self):
        screen = Rect(100, 50, 800, 600)

        assert hidden_frame(Rect(0, 0, 10, 10), screen) == Rect(899, 649, 10, 10)
