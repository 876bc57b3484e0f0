"""Overlay synchronization — stamp overlays onto the working frame list.

Two strategies, chosen by overlay type:
  - StaticImage: one image stamped on every frame at the base character's
    per-frame anchors ("following" placement). A 'multiple' descriptor
    stamps the image once per placement, in list order.
  - AnimatedSequence: the working list and the overlay frames are both
    repeated to lcm(len(working), len(overlay)) and paired index by index,
    so each animation keeps its own period.

Every step returns a new working list (handlers are copied, inputs are left
untouched) together with the indices whose composition had to be skipped.
Skips only happen on the animated path and are logged.
"""

import logging
from typing import NamedTuple

from PIL import Image

from .errors import DecodeError, LoadError
from .geometry import place_overlay, resolve_flip
from .handlers import FrameHandler
from .loader import AnimatedSequence, StaticImage
from .sequences import least_common_multiple, replicate_to_length

logger = logging.getLogger(__name__)


class SyncResult(NamedTuple):
    """The new working list plus indices of frames left without the overlay."""
    handlers: list[FrameHandler]
    skipped: list[int]


def _stamp(
    handler: FrameHandler,
    image: Image.Image,
    placements: list[dict],
    base_config: dict,
    width: int,
    height: int,
    offset_x: int,
    offset_y: int,
    flip_x: bool,
    flip_y: bool,
    use_placement_flips: bool,
) -> None:
    """Append one draw instruction per placement to handler."""
    for placement in placements:
        eff_x = resolve_flip(
            base_config["flip_x"], flip_x,
            use_placement_flips and placement["flip_x"],
        )
        eff_y = resolve_flip(
            base_config["flip_y"], flip_y,
            use_placement_flips and placement["flip_y"],
        )
        x, y, w, h = place_overlay(
            placement, width, height, eff_x, eff_y, offset_x, offset_y,
        )
        handler.add_resized_image(image, x, y, w, h)


def apply_static_overlay(
    handlers: list[FrameHandler],
    overlay: StaticImage,
    base_config: dict,
    width: int,
    height: int,
    offset_x: int = 0,
    offset_y: int = 0,
    flip_x: bool = False,
    flip_y: bool = False,
) -> SyncResult:
    """Stamp a static image on every frame at the base anchors.

    Handler i uses the descriptor of base frame i mod F. Effective flip per
    axis is base default XOR flip_x/flip_y XOR the placement's own flag.
    """
    placements = base_config["placements"]
    frame_count = len(placements)

    result = []
    for i, handler in enumerate(handlers):
        new_handler = handler.copy()
        _stamp(
            new_handler, overlay.image, placements[i % frame_count], base_config,
            width, height, offset_x, offset_y, flip_x, flip_y,
            use_placement_flips=True,
        )
        result.append(new_handler)
    return SyncResult(result, [])


def pair_overlay_frames(handlers: list, frames: list, stamp) -> list[int]:
    """Call stamp(handler, frame, index) for each handler index.

    An index with no matching frame, or whose stamp fails to load or decode
    its frame, is skipped and logged; the rest of the batch continues.

    Returns:
        Indices that were skipped, in ascending order.
    """
    skipped = []
    for i, handler in enumerate(handlers):
        if i >= len(frames):
            logger.warning(
                "Frame %d: no overlay frame to pair with (overlay has %d); skipping",
                i, len(frames),
            )
            skipped.append(i)
            continue
        try:
            stamp(handler, frames[i], i)
        except (LoadError, DecodeError) as e:
            logger.warning("Frame %d: overlay composition failed (%s); skipping", i, e)
            skipped.append(i)
    return skipped


def apply_animated_overlay(
    handlers: list[FrameHandler],
    overlay: AnimatedSequence,
    base_config: dict,
    width: int,
    height: int,
    offset_x: int = 0,
    offset_y: int = 0,
    flip_x: bool = False,
    flip_y: bool = False,
) -> SyncResult:
    """Layer an animation over the working list on a common timeline.

    Both sequences are repeated whole to lcm(len(handlers), len(frames)).
    Overlay frame i is drawn on handler i at the anchors of base frame
    i mod F, using the default flips only (base default XOR flip_x/flip_y).
    """
    placements = base_config["placements"]
    frame_count = len(placements)

    target = least_common_multiple(len(handlers), len(overlay.frames))
    working = [h.copy() for h in replicate_to_length(handlers, target)]
    frames = replicate_to_length(overlay.frames, target)
    logger.debug(
        "Reconciling %d frames with %d overlay frames -> %d",
        len(handlers), len(overlay.frames), target,
    )

    def stamp(handler, frame, index):
        _stamp(
            handler, frame, placements[index % frame_count], base_config,
            width, height, offset_x, offset_y, flip_x, flip_y,
            use_placement_flips=False,
        )

    skipped = pair_overlay_frames(working, frames, stamp)
    if skipped:
        logger.warning(
            "Overlay %s: skipped %d of %d frames", overlay.source, len(skipped), len(working),
        )
    return SyncResult(working, skipped)


def synchronize(
    handlers: list[FrameHandler],
    overlay: StaticImage | AnimatedSequence,
    base_config: dict,
    width: int,
    height: int,
    **placement,
) -> SyncResult:
    """Dispatch to the static or animated strategy by overlay type.

    Keyword args (offset_x, offset_y, flip_x, flip_y) pass through.
    """
    if isinstance(overlay, AnimatedSequence):
        return apply_animated_overlay(handlers, overlay, base_config, width, height, **placement)
    if isinstance(overlay, StaticImage):
        return apply_static_overlay(handlers, overlay, base_config, width, height, **placement)
    raise TypeError(f"Unsupported overlay type: {type(overlay).__name__}")
