"""Per-output-frame accumulators and the handler set builder.

A FrameHandler collects draw instructions for one output frame and renders
them in insertion order, so later instructions paint over earlier ones.
"""

import logging
import math
from typing import NamedTuple

from PIL import Image

from .errors import ConfigError
from .surface import new_surface, tint_raster

logger = logging.getLogger(__name__)


class DrawInstruction(NamedTuple):
    """One positioned draw. None extents mean the image's native size."""
    image: Image.Image
    x: int
    y: int
    width: int | None
    height: int | None


class FrameHandler:
    """Mutable accumulator bound to a single output frame."""

    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height
        self.instructions: list[DrawInstruction] = []
        self.tint: tuple[int, int, int] | None = None

    def add_image(self, image: Image.Image) -> None:
        """Draw image at the canvas origin at its native size."""
        self.instructions.append(DrawInstruction(image, 0, 0, None, None))

    def add_resized_image(
        self, image: Image.Image, x: int, y: int, width: int, height: int,
    ) -> None:
        """Draw image into a box; negative extents draw mirrored."""
        self.instructions.append(DrawInstruction(image, x, y, width, height))

    def apply_color(self, color: tuple[int, int, int]) -> None:
        """Tint the base layer (first instruction) when rendering."""
        self.tint = color

    def copy(self) -> "FrameHandler":
        """Independent handler with the same instructions and tint."""
        clone = FrameHandler(self.width, self.height)
        clone.instructions = list(self.instructions)
        clone.tint = self.tint
        return clone

    def render(self, surface_factory=new_surface) -> Image.Image:
        """Replay all draw instructions onto a fresh surface."""
        surface = surface_factory(self.width, self.height)
        for i, instr in enumerate(self.instructions):
            image = instr.image
            if i == 0 and self.tint is not None:
                image = tint_raster(image, self.tint)
            surface.draw_image(image, instr.x, instr.y, instr.width, instr.height)
        return surface.to_image()


def build_frame_handlers(
    base_frames: list[Image.Image],
    width: int,
    height: int,
    colors: list[tuple[int, int, int]] | None = None,
) -> list[FrameHandler]:
    """Build the initial working list for one encode.

    The base sequence is repeated ceil(V / F) times, where V is the number
    of color variants (1 without colors) and F the base frame count, so the
    list covers every variant and stays a whole number of base loops. Each
    repetition gets fresh handlers. With colors, handler i is tinted
    colors[i % V] across the full list, including frames beyond V.

    Raises:
        ConfigError: If there are no base frames.
    """
    if not base_frames:
        raise ConfigError("Base sequence has no frames")

    variant_count = len(colors) if colors else 1
    loops = math.ceil(variant_count / len(base_frames))

    handlers = []
    for _ in range(loops):
        for image in base_frames:
            handler = FrameHandler(width, height)
            handler.add_image(image)
            handlers.append(handler)

    if colors:
        for i, handler in enumerate(handlers):
            handler.apply_color(colors[i % variant_count])

    logger.debug(
        "Built %d frame handlers (%d base frames x %d loops, %d variants)",
        len(handlers), len(base_frames), loops, variant_count,
    )
    return handlers
