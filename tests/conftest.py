"""Shared test fixtures for parrotcompose tests."""

import pytest
import yaml
from PIL import Image


@pytest.fixture
def anyio_backend():
    return "asyncio"


def solid(color, size=(16, 16)):
    """A fully opaque RGBA image of one color."""
    return Image.new("RGBA", size, (*color, 255))


def write_frames(directory, colors, size=(32, 32)):
    """Write one PNG per color as frame1.png, frame2.png, ..."""
    directory.mkdir(parents=True, exist_ok=True)
    for i, color in enumerate(colors, start=1):
        solid(color, size).save(directory / f"frame{i}.png")
    return directory


def base_config_dict(frame_count=4, placement=None, **overrides):
    """A valid base config mapping with the same placement on every frame."""
    placement = placement or {"x": 5, "y": 5}
    cfg = {
        "width": 32,
        "height": 32,
        "frames": frame_count,
        "flip_x": False,
        "flip_y": False,
        "frames_dir": "frames",
        "white_frames_dir": "white",
        "following_frames": [dict(placement) for _ in range(frame_count)],
    }
    cfg.update(overrides)
    return cfg


def normalized_config(frame_count=4, placements=None, flip_x=False, flip_y=False):
    """An already-normalized base config for synchronizer tests."""
    if placements is None:
        placements = [[{"x": 5, "y": 5, "flip_x": False, "flip_y": False}]
                      for _ in range(frame_count)]
    return {
        "width": 32,
        "height": 32,
        "frame_count": len(placements),
        "flip_x": flip_x,
        "flip_y": flip_y,
        "frames_dir": None,
        "white_frames_dir": None,
        "placements": placements,
    }


FRAME_COLORS = [(200, 30, 30), (30, 200, 30), (30, 30, 200), (200, 200, 30)]


@pytest.fixture
def parrot_dir(tmp_path):
    """A 4-frame base character directory with colored and white frames."""
    root = tmp_path / "parrots" / "parrot"
    write_frames(root / "frames", FRAME_COLORS)
    write_frames(root / "white", [(255, 255, 255)] * 4)
    with open(root / "config.yaml", "w") as f:
        yaml.dump(base_config_dict(), f)
    return root
