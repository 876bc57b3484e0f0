"""Tests for flip-aware placement geometry."""

from parrotcompose.geometry import place_overlay, place_with_flip, resolve_flip


class TestPlaceWithFlip:
    def test_no_flip_passes_through(self):
        assert place_with_flip(10, 30, False) == (10, 30)

    def test_flip_moves_anchor_and_negates_extent(self):
        assert place_with_flip(10, 30, True) == (40, -30)

    def test_double_flip_restores_original(self):
        pos, ext = place_with_flip(10, 30, True)
        pos2, ext2 = place_with_flip(pos, ext, True)
        assert ext2 == 30
        assert pos2 == 10

    def test_deterministic(self):
        assert place_with_flip(3, 7, True) == place_with_flip(3, 7, True)


class TestResolveFlip:
    def test_default_only(self):
        assert resolve_flip(True) is True
        assert resolve_flip(False) is False

    def test_each_layer_inverts(self):
        assert resolve_flip(True, True) is False
        assert resolve_flip(False, True) is True
        assert resolve_flip(True, True, True) is True
        assert resolve_flip(False, False, True) is True

    def test_false_overrides_keep_default(self):
        assert resolve_flip(True, False, False) is True


class TestPlaceOverlay:
    def test_unflipped_with_offset(self):
        box = place_overlay({"x": 5, "y": 6}, 20, 10, False, False, offset_x=1, offset_y=2)
        assert box == (6, 8, 20, 10)

    def test_x_uses_width_and_y_uses_height(self):
        box = place_overlay({"x": 5, "y": 6}, 20, 10, True, True)
        assert box == (25, 16, -20, -10)

    def test_flip_one_axis(self):
        box = place_overlay({"x": 5, "y": 6}, 20, 10, False, True)
        assert box == (5, 16, 20, -10)
