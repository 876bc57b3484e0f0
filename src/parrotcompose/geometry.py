"""Flip-aware placement geometry for overlay sub-images.

Mirroring is expressed purely as a coordinate transform: a flipped axis
moves the anchor to the far edge and negates the extent, and the raster
surface draws negative extents mirrored about the anchor.
"""


def place_with_flip(position: int, extent: int, flip: bool) -> tuple[int, int]:
    """Return (position, extent) adjusted for a flip along one axis.

    Unflipped inputs pass through. Flipped: (position + extent, -extent).
    """
    if flip:
        return position + extent, -extent
    return position, extent


def resolve_flip(default: bool, *overrides: bool) -> bool:
    """Effective flip for one axis.

    Each override layer inverts the previous result rather than replacing
    it, so the result is the XOR of all flags.
    """
    flip = bool(default)
    for override in overrides:
        if override:
            flip = not flip
    return flip


def place_overlay(
    placement: dict,
    width: int,
    height: int,
    flip_x: bool,
    flip_y: bool,
    offset_x: int = 0,
    offset_y: int = 0,
) -> tuple[int, int, int, int]:
    """Compute the (x, y, width, height) draw box for one placement.

    Args:
        placement: Dict with 'x' and 'y' anchor coordinates.
        width: Requested overlay width.
        height: Requested overlay height.
        flip_x: Effective horizontal flip.
        flip_y: Effective vertical flip.
        offset_x: Added to x after the flip transform.
        offset_y: Added to y after the flip transform.
    """
    x, w = place_with_flip(placement["x"], width, flip_x)
    y, h = place_with_flip(placement["y"], height, flip_y)
    return x + offset_x, y + offset_y, w, h
