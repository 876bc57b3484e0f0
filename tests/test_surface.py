"""Tests for the raster surface primitive and tinting."""

from PIL import Image

from conftest import solid
from parrotcompose.surface import RasterSurface, new_surface, tint_raster


class TestRasterSurface:
    def test_starts_transparent(self):
        img = new_surface(8, 8).to_image()
        assert img.mode == "RGBA"
        assert img.getpixel((0, 0)) == (0, 0, 0, 0)

    def test_native_size_draw(self):
        surface = RasterSurface(8, 8)
        surface.draw_image(solid((9, 8, 7), (2, 2)), 3, 3)
        img = surface.to_image()
        assert img.getpixel((3, 3)) == (9, 8, 7, 255)
        assert img.getpixel((5, 5))[3] == 0

    def test_resized_draw(self):
        surface = RasterSurface(8, 8)
        surface.draw_image(solid((9, 8, 7), (2, 2)), 0, 0, 6, 6)
        img = surface.to_image()
        assert img.getpixel((5, 5)) == (9, 8, 7, 255)
        assert img.getpixel((6, 6))[3] == 0

    def test_negative_height_mirrors_above_anchor(self):
        overlay = Image.new("RGBA", (1, 4), (0, 0, 0, 0))
        overlay.putpixel((0, 0), (255, 0, 0, 255))  # top pixel red
        surface = RasterSurface(8, 8)
        surface.draw_image(overlay, 2, 6, 1, -4)
        img = surface.to_image()
        # Drawn into rows [2, 6), upside down: red lands on row 5.
        assert img.getpixel((2, 5)) == (255, 0, 0, 255)
        assert img.getpixel((2, 2))[3] == 0

    def test_clips_outside_canvas(self):
        surface = RasterSurface(8, 8)
        surface.draw_image(solid((1, 2, 3), (4, 4)), -2, -2)
        surface.draw_image(solid((4, 5, 6), (4, 4)), 6, 6)
        surface.draw_image(solid((7, 7, 7), (4, 4)), 20, 20)
        img = surface.to_image()
        assert img.getpixel((1, 1)) == (1, 2, 3, 255)
        assert img.getpixel((2, 2))[3] == 0
        assert img.getpixel((7, 7)) == (4, 5, 6, 255)

    def test_zero_extent_draws_nothing(self):
        surface = RasterSurface(4, 4)
        surface.draw_image(solid((1, 2, 3)), 0, 0, 0, 4)
        assert surface.to_image().getpixel((0, 0))[3] == 0


class TestTintRaster:
    def test_white_takes_color(self):
        tinted = tint_raster(solid((255, 255, 255), (2, 2)), (10, 200, 30))
        assert tinted.getpixel((0, 0)) == (10, 200, 30, 255)

    def test_alpha_preserved(self):
        img = Image.new("RGBA", (1, 1), (255, 255, 255, 0))
        assert tint_raster(img, (255, 0, 0)).getpixel((0, 0))[3] == 0
