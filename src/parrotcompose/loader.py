"""Overlay loading — local files or http(s) URLs, static or animated.

The overlay kind is decided once, here, from the source name: anything
ending in .gif (case-insensitive, query string allowed) is loaded as an
AnimatedSequence, everything else as a StaticImage. Downstream code
dispatches on the returned type and never looks at the name again.

Fetching is asynchronous (httpx for URLs, a worker thread for files);
decoding runs in a worker thread so the event loop is never blocked.
There are no retries and no extra deadline beyond httpx's defaults.
"""

import asyncio
import io
import logging
import re
from pathlib import Path
from typing import NamedTuple

import httpx
from PIL import Image, ImageSequence

from .errors import DecodeError, LoadError

logger = logging.getLogger(__name__)

_ANIMATED_SOURCE = re.compile(r"\.gif(?:$|[?#])", re.IGNORECASE)


class StaticImage(NamedTuple):
    """A single raster stamped identically on every base frame."""
    source: str
    image: Image.Image


class AnimatedSequence(NamedTuple):
    """An ordered, non-empty list of raster frames with its own length."""
    source: str
    frames: list[Image.Image]


def is_animated_source(source: str) -> bool:
    """True if the source name has an animated-format (.gif) suffix."""
    return _ANIMATED_SOURCE.search(str(source)) is not None


def _is_url(source: str) -> bool:
    return str(source).lower().startswith(("http://", "https://"))


async def _fetch_bytes(source: str, client: httpx.AsyncClient | None = None) -> bytes:
    """Read raw bytes from a URL or a local path."""
    if _is_url(source):
        try:
            if client is not None:
                response = await client.get(source, follow_redirects=True)
            else:
                async with httpx.AsyncClient() as own_client:
                    response = await own_client.get(source, follow_redirects=True)
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise LoadError(f"Could not fetch overlay {source}: {e}") from e
        return response.content

    try:
        return await asyncio.to_thread(Path(source).read_bytes)
    except OSError as e:
        raise LoadError(f"Could not read overlay {source}: {e}") from e


def _decode_static(data: bytes, source: str) -> Image.Image:
    try:
        with Image.open(io.BytesIO(data)) as img:
            return img.convert("RGBA")
    except (OSError, ValueError, EOFError) as e:
        raise DecodeError(f"Could not decode image {source}: {e}") from e


def _decode_frames(data: bytes, source: str) -> list[Image.Image]:
    try:
        with Image.open(io.BytesIO(data)) as img:
            frames = [frame.convert("RGBA") for frame in ImageSequence.Iterator(img)]
    except (OSError, ValueError, EOFError) as e:
        raise DecodeError(f"Could not decode animation {source}: {e}") from e
    if not frames:
        raise DecodeError(f"Animation {source} has no frames")
    return frames


async def load_static_image(
    source: str, client: httpx.AsyncClient | None = None,
) -> Image.Image:
    """Load and decode a single RGBA raster.

    Raises:
        LoadError: Missing file or failed fetch.
        DecodeError: Unreadable image data.
    """
    data = await _fetch_bytes(source, client)
    return await asyncio.to_thread(_decode_static, data, source)


async def load_animated_frames(
    source: str, client: httpx.AsyncClient | None = None,
) -> list[Image.Image]:
    """Load and decode every frame of an animation (non-empty, ordered).

    Raises:
        LoadError: Missing file or failed fetch.
        DecodeError: Unreadable or empty animation.
    """
    data = await _fetch_bytes(source, client)
    return await asyncio.to_thread(_decode_frames, data, source)


async def load_overlay(
    source: str, client: httpx.AsyncClient | None = None,
) -> StaticImage | AnimatedSequence:
    """Load an overlay as a tagged StaticImage or AnimatedSequence."""
    source = str(source)
    if is_animated_source(source):
        frames = await load_animated_frames(source, client)
        logger.info("Loaded animated overlay %s (%d frames)", source, len(frames))
        return AnimatedSequence(source, frames)

    image = await load_static_image(source, client)
    logger.info("Loaded static overlay %s (%dx%d)", source, *image.size)
    return StaticImage(source, image)
