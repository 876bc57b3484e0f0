"""Composition session — one base character, any overlays, one GIF.

Usage:
    composer = ParrotComposer(load_base_config("parrots/parrot/config.yaml"))
    composer.start("out.gif", delay=40, colors=[(255, 0, 0), (0, 255, 0)])
    await composer.add_overlay("hat.png", width=30, height=30)
    await composer.add_overlay("https://example.com/spin.gif", 30, 30)
    composer.finish()

Overlays are applied one at a time; each call replaces the working list
with the synchronized result before the next overlay is considered.
"""

import logging

import httpx

from .encoder import CONFIGURED, EncodingDriver
from .errors import MisuseError
from .frames import load_base_frames
from .handlers import build_frame_handlers
from .loader import AnimatedSequence, StaticImage, load_overlay
from .overlays import synchronize
from .surface import new_surface

logger = logging.getLogger(__name__)


class ParrotComposer:
    """Drives frame building, overlay synchronization and encoding."""

    def __init__(self, base_config: dict, surface_factory=new_surface):
        self.base_config = base_config
        self.surface_factory = surface_factory
        self.driver = None
        self.handlers = None
        self.skipped: list[tuple[str, int]] = []

    def start(self, output, delay: int | None = None, colors=None, base_frames=None) -> None:
        """Configure the output and build the initial working list.

        With colors the white (tintable) frames are loaded. base_frames
        bypasses the frame source with already-decoded images.

        Raises:
            MisuseError: The session was already started.
        """
        cfg = self.base_config
        if self.driver is not None:
            raise MisuseError(f"start() called twice (session {self.driver.state})")
        driver = EncodingDriver(output)
        driver.configure(cfg["width"], cfg["height"], delay=delay, colors=colors)
        self.driver = driver

        if base_frames is None:
            base_frames = load_base_frames(cfg, white=bool(colors))
        self.handlers = build_frame_handlers(
            base_frames, cfg["width"], cfg["height"], self.driver.colors,
        )

    def _require_started(self) -> None:
        if self.driver is None or self.driver.state != CONFIGURED:
            raise MisuseError("Composition not started (call start() first)")

    def add_loaded_overlay(
        self,
        overlay: StaticImage | AnimatedSequence,
        width: int,
        height: int,
        offset_x: int = 0,
        offset_y: int = 0,
        flip_x: bool = False,
        flip_y: bool = False,
    ) -> list[int]:
        """Synchronize an already-loaded overlay into the working list.

        Returns:
            Indices skipped for this overlay (empty for static overlays).
        """
        self._require_started()
        result = synchronize(
            self.handlers, overlay, self.base_config, int(width), int(height),
            offset_x=int(offset_x), offset_y=int(offset_y),
            flip_x=flip_x, flip_y=flip_y,
        )
        self.handlers = result.handlers
        self.skipped.extend((overlay.source, i) for i in result.skipped)
        logger.info(
            "Applied overlay %s: %d frames, %d skipped",
            overlay.source, len(result.handlers), len(result.skipped),
        )
        return result.skipped

    async def add_overlay(
        self,
        source: str,
        width: int,
        height: int,
        offset_x: int = 0,
        offset_y: int = 0,
        flip_x: bool = False,
        flip_y: bool = False,
        client: httpx.AsyncClient | None = None,
    ) -> list[int]:
        """Load an overlay from a path or URL and synchronize it.

        Raises:
            MisuseError: start() has not been called.
            LoadError / DecodeError: The overlay could not be loaded.
        """
        self._require_started()
        overlay = await load_overlay(source, client)
        return self.add_loaded_overlay(
            overlay, width, height, offset_x, offset_y, flip_x, flip_y,
        )

    def finish(self):
        """Encode the working list. Returns the rendered frames."""
        if self.driver is None:
            raise MisuseError("finish() called before start()")
        return self.driver.finish(self.handlers or [], self.surface_factory)
