"""Raster surface primitives — drawing and tinting with Pillow.

A RasterSurface is a transparent RGBA canvas. draw_image() accepts negative
extents, which mirror the image about the anchor point, matching the
coordinates produced by geometry.place_with_flip.
"""

import numpy as np
from PIL import Image


class RasterSurface:
    """A transparent RGBA canvas that overlay images are drawn onto."""

    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height
        self._canvas = Image.new("RGBA", (width, height), (0, 0, 0, 0))

    def draw_image(
        self,
        raster: Image.Image,
        x: int,
        y: int,
        width: int | None = None,
        height: int | None = None,
    ) -> None:
        """Alpha-composite raster onto the canvas.

        Width/height default to the raster's native size. A negative width
        draws mirrored horizontally into [x + width, x); a negative height
        mirrors vertically. Parts falling outside the canvas are clipped.
        """
        w = raster.width if width is None else int(width)
        h = raster.height if height is None else int(height)
        if w == 0 or h == 0:
            return

        img = raster.convert("RGBA")
        if img.size != (abs(w), abs(h)):
            img = img.resize((abs(w), abs(h)), resample=Image.BICUBIC)

        left, top = int(x), int(y)
        if w < 0:
            img = img.transpose(Image.Transpose.FLIP_LEFT_RIGHT)
            left += w
        if h < 0:
            img = img.transpose(Image.Transpose.FLIP_TOP_BOTTOM)
            top += h

        # alpha_composite rejects negative destinations, so clip by hand.
        dst_left, dst_top = max(0, left), max(0, top)
        right = min(self.width, left + img.width)
        bottom = min(self.height, top + img.height)
        if right <= dst_left or bottom <= dst_top:
            return

        src_left, src_top = dst_left - left, dst_top - top
        crop = img.crop((
            src_left, src_top,
            src_left + right - dst_left, src_top + bottom - dst_top,
        ))
        self._canvas.alpha_composite(crop, dest=(dst_left, dst_top))

    def to_image(self) -> Image.Image:
        """Return a copy of the canvas as an RGBA Pillow image."""
        return self._canvas.copy()


def new_surface(width: int, height: int) -> RasterSurface:
    """Default surface factory used by a composition session."""
    return RasterSurface(width, height)


def tint_raster(raster: Image.Image, color: tuple[int, int, int]) -> Image.Image:
    """Recolor a (white) raster by multiplying its RGB channels by color.

    Alpha is preserved, so transparent pixels stay transparent.
    """
    arr = np.array(raster.convert("RGBA"), dtype=np.float32)
    scale = np.array(color, dtype=np.float32) / 255.0
    arr[:, :, :3] *= scale
    return Image.fromarray(np.clip(np.rint(arr), 0, 255).astype(np.uint8))
