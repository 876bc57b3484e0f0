"""Base-character config loader — frame geometry and overlay anchors.

Each base character (e.g. "parrot") lives in its own directory with a YAML
config describing its canvas, its frames, and where overlays follow it on
every frame.

Base config schema:
  width: 128
  height: 128
  frames: 10                    # number of base frames
  flip_x: false                 # optional default horizontal flip
  flip_y: false                 # optional default vertical flip
  paths:
    art: "/data/parrots"
  frames_dir: "${art}/parrot/frames"        # relative dirs resolve against
  white_frames_dir: "white"                 # the config file's directory
  following_frames:             # one entry per base frame
    - {x: 40, y: 12}
    - {x: 41, y: 10, flip_x: true}
    - multiple:
        - {x: 10, y: 20}
        - {x: 70, y: 20}
"""

from pathlib import Path

import yaml

from .common import resolve_path_vars
from .errors import ConfigError

CONFIG_FILENAME = "config.yaml"


def base_config_path(name: str, root: str | Path) -> Path:
    """Path of the config for a named base character under root."""
    return Path(root) / name / CONFIG_FILENAME


def load_base_config(config_path: str | Path) -> dict:
    """Load, validate, and normalize a base-character config.

    Processing pipeline:
      1. Parse YAML.
      2. Validate canvas size and frame count.
      3. Resolve ${path} variables and relative frame directories.
      4. Normalize following_frames into one placement list per frame.

    Args:
        config_path: Path to the YAML base config.

    Returns:
        Dict with width, height, frame_count, flip_x, flip_y, frames_dir,
        white_frames_dir (or None) and placements.

    Raises:
        ConfigError: Missing file or missing/invalid fields.
    """
    config_path = Path(config_path)
    try:
        with open(config_path) as f:
            raw = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"Cannot read base config {config_path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in base config {config_path}: {e}") from e

    if not isinstance(raw, dict):
        raise ConfigError(f"Base config {config_path}: expected a mapping")

    for field in ("width", "height", "frames", "frames_dir", "following_frames"):
        if field not in raw:
            raise ConfigError(f"Base config: missing required '{field}' field")

    width = _positive_int(raw["width"], "width")
    height = _positive_int(raw["height"], "height")
    frame_count = _positive_int(raw["frames"], "frames")

    paths = raw.get("paths", {})
    base_dir = config_path.parent
    try:
        frames_dir = _resolve_dir(raw["frames_dir"], paths, base_dir)
        white = raw.get("white_frames_dir")
        white_frames_dir = _resolve_dir(white, paths, base_dir) if white else None
    except ValueError as e:
        raise ConfigError(f"Base config: {e}") from e

    following = raw["following_frames"]
    if not isinstance(following, list):
        raise ConfigError("Base config: 'following_frames' must be a list")
    if len(following) != frame_count:
        raise ConfigError(
            f"Base config: following_frames has {len(following)} entries, "
            f"expected one per frame ({frame_count})"
        )

    placements = [_normalize_descriptor(entry, i) for i, entry in enumerate(following)]

    return {
        "width": width,
        "height": height,
        "frame_count": frame_count,
        "flip_x": bool(raw.get("flip_x", False)),
        "flip_y": bool(raw.get("flip_y", False)),
        "frames_dir": frames_dir,
        "white_frames_dir": white_frames_dir,
        "placements": placements,
    }


def _positive_int(value, field: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ConfigError(
            f"Base config: '{field}' must be a positive integer, got {value!r}"
        )
    return value


def _resolve_dir(value, paths: dict, base_dir: Path) -> Path:
    p = Path(resolve_path_vars(str(value), paths))
    return p if p.is_absolute() else base_dir / p


def _normalize_descriptor(entry, index: int) -> list[dict]:
    """Turn a single or 'multiple' descriptor into a list of placements."""
    if not isinstance(entry, dict):
        raise ConfigError(f"Frame {index}: descriptor must be a mapping")

    if "multiple" in entry:
        items = entry["multiple"]
        if not isinstance(items, list) or not items:
            raise ConfigError(f"Frame {index}: 'multiple' must be a non-empty list")
        return [_normalize_placement(item, f"Frame {index}, placement {j}")
                for j, item in enumerate(items)]

    return [_normalize_placement(entry, f"Frame {index}")]


def _normalize_placement(item, prefix: str) -> dict:
    if not isinstance(item, dict):
        raise ConfigError(f"{prefix}: placement must be a mapping")
    for axis in ("x", "y"):
        if axis not in item:
            raise ConfigError(f"{prefix}: missing required field '{axis}'")
        if isinstance(item[axis], bool) or not isinstance(item[axis], (int, float)):
            raise ConfigError(f"{prefix}: '{axis}' must be a number, got {item[axis]!r}")
    return {
        "x": int(item["x"]),
        "y": int(item["y"]),
        "flip_x": bool(item.get("flip_x", False)),
        "flip_y": bool(item.get("flip_y", False)),
    }
