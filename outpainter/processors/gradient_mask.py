"""
Gradient soft masks for outpainting

The mask tells the generator how strongly to alter each pixel: the
background level marks pixels to preserve, 255 marks pixels to regenerate.
Each extended side gets a band that is fully regenerated over the empty
region and fades back to the background over the source's outer edge.
"""

import logging
from typing import Sequence, Tuple

import numpy as np
from PIL import Image

logger = logging.getLogger(__name__)

FULL_STRENGTH = 255


def sample_gradient(
    positions: np.ndarray, stops: Sequence[Tuple[float, float]]
) -> np.ndarray:
    """
    Sample a piecewise linear gradient.

    Args:
        positions: Domain positions to sample (clamped to the stop range)
        stops: (position, value) pairs, positions non-decreasing

    Returns:
        Interpolated values, same shape as positions
    """
    if not stops:
        raise ValueError("A gradient needs at least one stop")
    xp = np.array([s[0] for s in stops], dtype=np.float64)
    fp = np.array([s[1] for s in stops], dtype=np.float64)
    if np.any(np.diff(xp) < 0):
        raise ValueError(f"Gradient stops must be ordered: {list(xp)}")
    return np.interp(positions, xp, fp)


def edge_band(gap: int, edge: int, background: int) -> np.ndarray:
    """
    One extended side's band, ordered from the canvas edge inward.

    The band is gap + edge pixels wide. Position t runs from 1 at the canvas
    edge to 0 at the inner end; the first gap pixels are at full strength and
    the remaining edge pixels fade to background.

    Returns:
        uint8 array of length gap + edge (empty when both are zero)
    """
    band = gap + edge
    if band <= 0:
        return np.zeros(0, dtype=np.uint8)
    t = 1.0 - np.arange(band, dtype=np.float64) / band
    stops = [
        (0.0, background),
        (edge / band, FULL_STRENGTH),
        (1.0, FULL_STRENGTH),
    ]
    values = sample_gradient(t, stops)
    return np.clip(np.rint(values), 0, 255).astype(np.uint8)


def build_gradient_mask(
    canvas_size: Tuple[int, int],
    gaps: Tuple[int, int],
    edge: int,
    vertical: bool,
    background: int,
) -> Image.Image:
    """
    Build the soft mask for a canvas.

    Args:
        canvas_size: (width, height) of the canvas
        gaps: Empty pixels (before, after) the source along the extension axis
        edge: Width of the fade over the source's edge
        vertical: True when the canvas extends on Y
        background: Mask level for preserved pixels (0-255)

    Returns:
        Grayscale ("L") mask the size of the canvas
    """
    if not 0 <= background <= 255:
        raise ValueError(f"Mask background must be within 0-255, got {background}")
    if edge < 0:
        raise ValueError(f"Edge offset must be non-negative, got {edge}")

    width, height = canvas_size
    length = height if vertical else width
    profile = np.full(length, background, dtype=np.uint8)

    before, after = gaps
    if before > 0:
        band = edge_band(before, edge, background)[:length]
        profile[:len(band)] = np.maximum(profile[:len(band)], band)
    if after > 0:
        band = edge_band(after, edge, background)[:length][::-1]
        profile[length - len(band):] = np.maximum(profile[length - len(band):], band)

    if vertical:
        mask = np.repeat(profile[:, np.newaxis], width, axis=1)
    else:
        mask = np.repeat(profile[np.newaxis, :], height, axis=0)

    logger.debug(
        f"Built {'vertical' if vertical else 'horizontal'} mask {width}x{height}: "
        f"gaps={gaps} edge={edge} background={background}")
    return Image.fromarray(np.ascontiguousarray(mask))
