#!/usr/bin/env python3
"""Generate a synthetic base character and overlays for the demo manifest.

Creates examples/demo-parrots/blob/ (8 colored frames, 8 white frames and a
config.yaml) plus a static hat.png and a 3-frame spin.gif overlay. The blob
bobs up and down so overlay anchors visibly follow it.

Usage:
    python examples/generate_demo_parrot.py
    # Then render:
    parrotcompose --manifest examples/party.yaml --output examples/party.gif
"""

from pathlib import Path

import yaml
from PIL import Image, ImageDraw

OUTPUT_DIR = Path(__file__).resolve().parent / "demo-parrots"
SIZE = (64, 64)
FRAMES = 8

# Vertical bob per frame; the overlay anchor sits on top of the blob.
BOB = [0, -2, -4, -6, -6, -4, -2, 0]
BLOB_COLOR = (60, 200, 90)


def _blob_frame(dy: int, color: tuple[int, int, int]) -> Image.Image:
    """A filled ellipse on a transparent canvas, shifted by dy."""
    img = Image.new("RGBA", SIZE, (0, 0, 0, 0))
    draw = ImageDraw.Draw(img)
    draw.ellipse([(12, 24 + dy), (52, 60 + dy)], fill=(*color, 255))
    draw.ellipse([(36, 32 + dy), (42, 38 + dy)], fill=(20, 20, 20, 255))
    return img


def _config() -> dict:
    following = [{"x": 24, "y": 12 + dy} for dy in BOB]
    # Last frame stamps the overlay twice, mirrored on the second copy.
    following[-1] = {"multiple": [
        {"x": 14, "y": 12},
        {"x": 34, "y": 12, "flip_x": True},
    ]}
    return {
        "width": SIZE[0],
        "height": SIZE[1],
        "frames": FRAMES,
        "flip_x": False,
        "flip_y": False,
        "frames_dir": "frames",
        "white_frames_dir": "white",
        "following_frames": following,
    }


def main():
    blob_dir = OUTPUT_DIR / "blob"
    for sub in ("frames", "white"):
        (blob_dir / sub).mkdir(parents=True, exist_ok=True)

    for i, dy in enumerate(BOB, start=1):
        _blob_frame(dy, BLOB_COLOR).save(blob_dir / "frames" / f"frame{i}.png")
        _blob_frame(dy, (255, 255, 255)).save(blob_dir / "white" / f"frame{i}.png")
    print(f"  wrote {FRAMES} frames to {blob_dir}")

    with open(blob_dir / "config.yaml", "w") as f:
        yaml.dump(_config(), f, sort_keys=False)
    print(f"  wrote {blob_dir / 'config.yaml'}")

    hat = Image.new("RGBA", (16, 12), (0, 0, 0, 0))
    draw = ImageDraw.Draw(hat)
    draw.polygon([(0, 11), (8, 0), (15, 11)], fill=(220, 40, 120, 255))
    hat.save(OUTPUT_DIR / "hat.png")
    print(f"  wrote {OUTPUT_DIR / 'hat.png'}")

    spin = []
    for color in [(240, 200, 40), (40, 160, 240), (240, 80, 40)]:
        frame = Image.new("RGBA", (12, 12), (0, 0, 0, 0))
        ImageDraw.Draw(frame).rectangle([(2, 2), (9, 9)], fill=(*color, 255))
        spin.append(frame)
    spin[0].save(
        OUTPUT_DIR / "spin.gif", save_all=True, append_images=spin[1:],
        duration=80, loop=0,
    )
    print(f"  wrote {OUTPUT_DIR / 'spin.gif'}")

    print(f"\nDone. Demo assets in {OUTPUT_DIR}")


if __name__ == "__main__":
    main()
