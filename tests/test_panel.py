"""Unit tests for floating transcript panel geometry.

WHY: The panel floats over the video. If a drag or resize lets it escape
the viewport or collapse below its minimum size, the learner loses the
transcript until the page reloads.

HOW: All tests use a 1000x800 viewport and a panel starting at (100, 100)
with the default 480x400 size.
"""

import pytest

from segment_aligner.core.panel import (
    DEFAULT_HEIGHT,
    DEFAULT_WIDTH,
    MIN_HEIGHT,
    MIN_VISIBLE_PX,
    MIN_WIDTH,
    PanelBounds,
    Viewport,
    clamp_position,
    fit_to_viewport,
    initial_position,
    move_panel,
    resize_panel,
)

VIEWPORT = Viewport(width=1000, height=800)


@pytest.fixture
def bounds():
    return PanelBounds(x=100, y=100, width=DEFAULT_WIDTH, height=DEFAULT_HEIGHT)


class TestPosition:

    def test_initial_position_bottom_right(self, bounds):
        placed = initial_position(bounds, VIEWPORT)
        assert (placed.x, placed.y) == (1000 - 480 - 24, 800 - 400 - 24 - 60)
        assert (placed.width, placed.height) == (bounds.width, bounds.height)

    def test_move_within_viewport(self, bounds):
        moved = move_panel(bounds, 50, -30, VIEWPORT)
        assert (moved.x, moved.y) == (150, 70)

    def test_move_keeps_strip_visible_on_right(self, bounds):
        assert move_panel(bounds, 5000, 0, VIEWPORT).x == 1000 - MIN_VISIBLE_PX

    def test_move_keeps_strip_visible_on_left(self, bounds):
        assert move_panel(bounds, -5000, 0, VIEWPORT).x == MIN_VISIBLE_PX - bounds.width

    def test_top_never_leaves_viewport(self, bounds):
        assert move_panel(bounds, 0, -5000, VIEWPORT).y == 0

    def test_bottom_keeps_strip_visible(self, bounds):
        assert move_panel(bounds, 0, 5000, VIEWPORT).y == 800 - MIN_VISIBLE_PX

    def test_clamp_position(self):
        assert clamp_position(-10, -10, 480, VIEWPORT) == (-10, 0)

    def test_fit_after_window_shrinks(self):
        panel = PanelBounds(x=900, y=700, width=480, height=400)
        fitted = fit_to_viewport(panel, Viewport(width=600, height=500))
        assert (fitted.x, fitted.y) == (550, 450)
        assert fitted.width == 480


class TestResize:

    def test_east_grows_width(self, bounds):
        resized = resize_panel("e", bounds, 100, 0, VIEWPORT)
        assert resized.width == 580
        assert resized.x == bounds.x

    def test_east_clamped_to_max(self, bounds):
        assert resize_panel("e", bounds, 1000, 0, VIEWPORT).width == pytest.approx(900)

    def test_east_clamped_to_min(self, bounds):
        assert resize_panel("e", bounds, -500, 0, VIEWPORT).width == MIN_WIDTH

    def test_south_clamped(self, bounds):
        assert resize_panel("s", bounds, 0, -500, VIEWPORT).height == MIN_HEIGHT
        assert resize_panel("s", bounds, 0, 900, VIEWPORT).height == pytest.approx(720)

    def test_west_moves_origin(self, bounds):
        resized = resize_panel("w", bounds, -100, 0, VIEWPORT)
        assert (resized.x, resized.width) == (0, 580)

    def test_west_ignored_below_min(self, bounds):
        resized = resize_panel("w", bounds, 200, 0, VIEWPORT)
        assert (resized.x, resized.width) == (bounds.x, bounds.width)

    def test_north_moves_origin(self, bounds):
        resized = resize_panel("n", bounds, 0, -50, VIEWPORT)
        assert (resized.y, resized.height) == (50, 450)

    def test_north_ignored_above_max(self, bounds):
        resized = resize_panel("n", bounds, 0, -400, VIEWPORT)
        assert (resized.y, resized.height) == (bounds.y, bounds.height)

    def test_corner_resizes_both_axes(self, bounds):
        resized = resize_panel("se", bounds, 40, 60, VIEWPORT)
        assert (resized.width, resized.height) == (520, 460)
        assert (resized.x, resized.y) == (bounds.x, bounds.y)

    def test_northwest_corner(self, bounds):
        resized = resize_panel("nw", bounds, -20, -30, VIEWPORT)
        assert resized == PanelBounds(x=80, y=70, width=500, height=430)

    def test_unknown_direction(self, bounds):
        with pytest.raises(ValueError, match="Unknown resize direction"):
            resize_panel("up", bounds, 0, 0, VIEWPORT)
