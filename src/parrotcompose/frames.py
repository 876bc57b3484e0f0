"""Base frame source — list and decode the frame images of a base character.

Frame files are ordered by natural sort (frame2 before frame10) so the
order is stable across calls for the same config.
"""

import logging
import re
from pathlib import Path

from PIL import Image

from .errors import ConfigError, LoadError

logger = logging.getLogger(__name__)

FRAME_EXTENSIONS = {".png", ".gif", ".jpg", ".jpeg", ".webp"}


def _natural_key(path: Path):
    return [int(part) if part.isdigit() else part.lower()
            for part in re.split(r"(\d+)", path.name)]


def list_base_frames(config: dict, white: bool = False) -> list[Path]:
    """Return the ordered frame files for a base config.

    Args:
        config: Normalized base config (see base_config.load_base_config).
        white: Use the white (tintable) frame set instead of the colored one.

    Raises:
        ConfigError: Missing directory, no white frames configured, or a
            frame count that does not match the config.
    """
    frames_dir = config["white_frames_dir"] if white else config["frames_dir"]
    if frames_dir is None:
        raise ConfigError("Base config has no white_frames_dir for tinting")

    frames_dir = Path(frames_dir)
    if not frames_dir.is_dir():
        raise ConfigError(f"Frame directory not found: {frames_dir}")

    files = sorted(
        (p for p in frames_dir.iterdir() if p.suffix.lower() in FRAME_EXTENSIONS),
        key=_natural_key,
    )
    if len(files) != config["frame_count"]:
        raise ConfigError(
            f"{frames_dir}: found {len(files)} frame images, "
            f"config declares {config['frame_count']}"
        )
    return files


def decode_frame(path: str | Path) -> Image.Image:
    """Decode one frame file to an RGBA image.

    Raises:
        LoadError: Missing or unreadable file.
    """
    try:
        with Image.open(path) as img:
            return img.convert("RGBA")
    except (OSError, ValueError, EOFError) as e:
        raise LoadError(f"Could not load base frame {path}: {e}") from e


def load_base_frames(config: dict, white: bool = False) -> list[Image.Image]:
    """List and decode all base frames in order."""
    frames = []
    for path in list_base_frames(config, white=white):
        logger.debug("Loading base frame %s", path)
        frames.append(decode_frame(path))
    return frames
