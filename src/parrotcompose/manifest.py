"""Compose manifest loader — which parrot, which colors, which overlays.

Compose manifest schema:
  paths:
    parrots: "/data/parrots"
    art: "/data/overlays"
  base: "${parrots}/parrot/config.yaml"
  output:
    delay: 40                   # ms per frame, default 40
    colors: ["#FF0000", "#00FF00", [0, 0, 255]]
  overlays:
    - source: "${art}/hat.png"  # local path or http(s) URL
      width: 30
      height: 30
      offset_x: 0               # optional
      offset_y: -4              # optional
      flip_x: false             # optional
      flip_y: false             # optional
"""

from pathlib import Path

import yaml

from .common import parse_color, resolve_path_vars
from .encoder import DEFAULT_DELAY_MS


def load_manifest(manifest_path: str | Path) -> dict:
    """Load, validate, and normalize a compose manifest.

    Processing pipeline:
      1. Parse YAML.
      2. Resolve ${path} variables in base and overlay sources.
      3. Parse output colors to RGB tuples, apply delay default.
      4. Validate each overlay entry.

    Args:
        manifest_path: Path to the YAML compose manifest.

    Returns:
        Normalized config dict: base, delay, colors (list or None), overlays.

    Raises:
        ValueError: Missing/invalid fields.
    """
    with open(manifest_path) as f:
        raw = yaml.safe_load(f)

    if not isinstance(raw, dict):
        raise ValueError("Compose manifest: expected a mapping")
    if "base" not in raw:
        raise ValueError("Compose manifest: missing required 'base' field")

    paths = raw.get("paths", {})
    base = Path(resolve_path_vars(str(raw["base"]), paths))
    if not base.is_absolute():
        base = Path(manifest_path).parent / base

    output = raw.get("output") or {}
    delay = output.get("delay", DEFAULT_DELAY_MS)
    if isinstance(delay, bool) or not isinstance(delay, int) or delay <= 0:
        raise ValueError(f"Compose manifest: output.delay must be a positive integer, got {delay!r}")

    colors = None
    raw_colors = output.get("colors")
    if raw_colors is not None:
        if not isinstance(raw_colors, list) or not raw_colors:
            raise ValueError("Compose manifest: output.colors must be a non-empty list")
        colors = []
        for i, value in enumerate(raw_colors):
            try:
                colors.append(parse_color(value))
            except ValueError as e:
                raise ValueError(f"Color {i}: {e}") from e

    overlays = []
    for i, item in enumerate(raw.get("overlays") or []):
        overlay = _validate_overlay(item, i, paths)
        # Relative local sources are relative to the manifest, like base.
        source = overlay["source"]
        if not _is_url(source) and not Path(source).is_absolute():
            overlay["source"] = str(Path(manifest_path).parent / source)
        overlays.append(overlay)

    return {"base": base, "delay": delay, "colors": colors, "overlays": overlays}


def _validate_overlay(item, index: int, paths: dict) -> dict:
    """Validate one overlay entry and fill in optional defaults."""
    prefix = f"Overlay {index}"
    if not isinstance(item, dict):
        raise ValueError(f"{prefix}: must be a mapping")

    for field in ("source", "width", "height"):
        if field not in item:
            raise ValueError(f"{prefix}: missing required field '{field}'")

    for field in ("width", "height"):
        value = item[field]
        if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
            raise ValueError(f"{prefix}: {field} must be a positive integer, got {value!r}")

    for field in ("offset_x", "offset_y"):
        value = item.get(field, 0)
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError(f"{prefix}: {field} must be an integer, got {value!r}")

    for field in ("flip_x", "flip_y"):
        value = item.get(field, False)
        if not isinstance(value, bool):
            raise ValueError(f"{prefix}: {field} must be true or false, got {value!r}")

    return {
        "source": resolve_path_vars(str(item["source"]), paths),
        "width": item["width"],
        "height": item["height"],
        "offset_x": item.get("offset_x", 0),
        "offset_y": item.get("offset_y", 0),
        "flip_x": item.get("flip_x", False),
        "flip_y": item.get("flip_y", False),
    }


def _is_url(source: str) -> bool:
    return source.lower().startswith(("http://", "https://"))


def validate_sources(config: dict) -> None:
    """Check that the base config and all local overlay files exist.

    URL sources are not checked. Reports all missing paths at once.

    Raises:
        FileNotFoundError: Lists all missing files.
    """
    missing = []
    if not Path(config["base"]).exists():
        missing.append(str(config["base"]))
    for overlay in config["overlays"]:
        source = overlay["source"]
        if _is_url(source):
            continue
        if not Path(source).exists():
            missing.append(source)

    if missing:
        msg = f"Missing {len(missing)} file(s):\n"
        for p in missing:
            msg += f"  - {p}\n"
        raise FileNotFoundError(msg)
