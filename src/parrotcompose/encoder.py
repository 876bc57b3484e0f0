"""Encoding driver — renders the final working list into an animated GIF.

Lifecycle: unconfigured -> configured -> finished. configure() binds the
output canvas, frame delay and color variants; finish() renders every frame
handler in order and writes the GIF via Pillow. Driving it out of order
raises MisuseError.
"""

import logging

import numpy as np
from PIL import Image

from .errors import ConfigError, MisuseError
from .surface import new_surface

logger = logging.getLogger(__name__)

DEFAULT_DELAY_MS = 40
LOOP_FOREVER = 0
TRANSPARENT_KEY = (0, 0, 0)

UNCONFIGURED = "unconfigured"
CONFIGURED = "configured"
FINISHED = "finished"


def apply_transparent_key(
    frame: Image.Image, key: tuple[int, int, int] = TRANSPARENT_KEY,
) -> Image.Image:
    """Make every pixel whose RGB equals key fully transparent."""
    arr = np.array(frame.convert("RGBA"))
    mask = np.all(arr[:, :, :3] == np.array(key, dtype=np.uint8), axis=-1)
    arr[mask, 3] = 0
    return Image.fromarray(arr)


class EncodingDriver:
    """Owns the output stream of one composition session.

    Args:
        output: File path or writable binary file object. File objects are
            left open for the caller; paths are opened and closed by Pillow.
    """

    def __init__(self, output):
        self.output = output
        self.state = UNCONFIGURED
        self.width = None
        self.height = None
        self.delay = DEFAULT_DELAY_MS
        self.colors = None
        self.variant_count = 1

    def configure(
        self,
        width: int,
        height: int,
        delay: int | None = None,
        colors: list[tuple[int, int, int]] | None = None,
    ) -> None:
        """Bind canvas size, per-frame delay (ms) and color variants.

        Raises:
            MisuseError: Already configured.
            ConfigError: Non-positive size or delay.
        """
        if self.state != UNCONFIGURED:
            raise MisuseError(f"configure() called while {self.state}")
        if width <= 0 or height <= 0:
            raise ConfigError(f"Output size must be positive, got {width}x{height}")

        delay = DEFAULT_DELAY_MS if delay is None else int(delay)
        if delay <= 0:
            raise ConfigError(f"Frame delay must be positive, got {delay}")

        self.width = width
        self.height = height
        self.delay = delay
        self.colors = list(colors) if colors else None
        self.variant_count = len(self.colors) if self.colors else 1
        self.state = CONFIGURED
        logger.info(
            "Encoder configured: %dx%d, %dms/frame, %d variant(s)",
            width, height, delay, self.variant_count,
        )

    def finish(self, handlers: list, surface_factory=new_surface) -> list[Image.Image]:
        """Render all handlers in order and write the looping GIF.

        Pillow merges consecutive identical frames into one GIF frame and sums
        their durations, so the stream may hold fewer frames than returned;
        playback timing is unchanged.

        Returns:
            The rendered frames, in output order.

        Raises:
            MisuseError: Not configured, already finished, or no frames.
        """
        if self.state != CONFIGURED:
            raise MisuseError(f"finish() called while {self.state}")
        if not handlers:
            raise MisuseError("finish() called with an empty frame list")

        frames = []
        for handler in handlers:
            frame = handler.render(surface_factory)
            if frame.size != (self.width, self.height):
                canvas = Image.new("RGBA", (self.width, self.height), (0, 0, 0, 0))
                canvas.paste(frame, (0, 0))
                frame = canvas
            frames.append(apply_transparent_key(frame))

        frames[0].save(
            self.output,
            format="GIF",
            save_all=True,
            append_images=frames[1:],
            duration=self.delay,
            loop=LOOP_FOREVER,
            disposal=2,
        )
        if hasattr(self.output, "flush"):
            self.output.flush()

        self.state = FINISHED
        logger.info("Encoded %d frames", len(frames))
        return frames
