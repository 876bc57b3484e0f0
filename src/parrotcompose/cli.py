"""CLI for parrot composition.

Reads a compose manifest, loads the base character, layers every overlay
in order, and writes one looping GIF.

Usage:
    # Compose
    parrotcompose --manifest party.yaml --output party.gif

    # Override the frame delay from the manifest
    parrotcompose --manifest party.yaml --output party.gif --delay 60

    # Validate only (no rendering)
    parrotcompose --manifest party.yaml --validate
"""

import argparse
import asyncio
import logging
import sys
import time
from pathlib import Path

import httpx

from .base_config import load_base_config
from .composer import ParrotComposer
from .manifest import load_manifest, validate_sources


async def _apply_overlays(composer: ParrotComposer, overlays: list[dict]) -> None:
    """Apply overlays one after another, sharing one HTTP client."""
    async with httpx.AsyncClient() as client:
        for i, overlay in enumerate(overlays):
            print(f"  OVERLAY [{i}] {overlay['source']}  {overlay['width']}x{overlay['height']}")
            skipped = await composer.add_overlay(
                overlay["source"], overlay["width"], overlay["height"],
                offset_x=overlay["offset_x"], offset_y=overlay["offset_y"],
                flip_x=overlay["flip_x"], flip_y=overlay["flip_y"],
                client=client,
            )
            if skipped:
                print(f"    skipped {len(skipped)} frame(s): {skipped}")


def compose(manifest_path: str, output_path: str, delay: int | None = None) -> None:
    """Load manifest and base config, apply overlays, write the GIF."""
    config = load_manifest(manifest_path)
    validate_sources(config)
    base = load_base_config(config["base"])

    delay = delay or config["delay"]
    colors = config["colors"]
    print(f"Base: {config['base']} ({base['frame_count']} frames, {base['width']}x{base['height']})")
    if colors:
        print(f"Colors: {len(colors)} variant(s)")

    t0 = time.monotonic()
    Path(output_path).parent.mkdir(parents=True, exist_ok=True)
    composer = ParrotComposer(base)
    composer.start(output_path, delay=delay, colors=colors)
    asyncio.run(_apply_overlays(composer, config["overlays"]))
    frames = composer.finish()
    elapsed = time.monotonic() - t0

    print(f"\nDone: {output_path} — {len(frames)} frames at {delay}ms, {elapsed:.1f}s wall")
    if composer.skipped:
        print(f"Warning: {len(composer.skipped)} overlay frame(s) skipped")


def main(args=None):
    parser = argparse.ArgumentParser(
        prog="parrotcompose",
        description="Compose a party parrot GIF from a YAML manifest.",
    )
    parser.add_argument(
        "--manifest", required=True,
        help="Path to YAML compose manifest",
    )
    parser.add_argument(
        "--output",
        help="Output GIF path",
    )
    parser.add_argument(
        "--delay", type=int, default=None,
        help="Frame delay in ms (overrides the manifest)",
    )
    parser.add_argument(
        "--validate", action="store_true",
        help="Validate manifest and base config only — don't render",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true",
        help="Enable debug logging",
    )
    args = parser.parse_args(args)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )

    if args.delay is not None and args.delay <= 0:
        parser.error("--delay must be a positive number of milliseconds")

    if args.validate:
        config = load_manifest(args.manifest)
        validate_sources(config)
        base = load_base_config(config["base"])
        print(f"Manifest valid: base {config['base']} ({base['frame_count']} frames)")
        for i, o in enumerate(config["overlays"]):
            print(f"  {i}: {o['source']} {o['width']}x{o['height']}")
        print("All paths verified.")
        return

    if not args.output:
        parser.error("--output is required (unless using --validate)")

    compose(args.manifest, args.output, delay=args.delay)


if __name__ == "__main__":
    main()
