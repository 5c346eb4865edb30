"""
Edge reflection - fills the empty part of an outpaint canvas with mirrored
source content so the generator starts from the source's colour statistics.
"""

import logging
from typing import Optional, Tuple

import cv2
import numpy as np
from PIL import Image

logger = logging.getLogger(__name__)


def open_sides(
    offset: Tuple[int, int],
    size: Tuple[int, int],
    canvas_size: Tuple[int, int],
    vertical: bool,
) -> Tuple[int, int]:
    """
    Empty pixels before and after the placed image along the extension axis.

    Args:
        offset: (x, y) placement of the image on the canvas
        size: (width, height) of the placed image
        canvas_size: (width, height) of the canvas
        vertical: True when the canvas extends the image on Y

    Returns:
        (gap_before, gap_after) - top/bottom when vertical, left/right otherwise
    """
    axis = 1 if vertical else 0
    before = max(0, offset[axis])
    after = max(0, canvas_size[axis] - offset[axis] - size[axis])
    return before, after


def shuffle_pixels(strip: np.ndarray, rng: np.random.Generator) -> np.ndarray:
    """Randomly permute pixel positions within a strip, keeping its histogram"""
    height, width = strip.shape[:2]
    flat = strip.reshape(height * width, -1)
    shuffled = flat[rng.permutation(height * width)]
    return shuffled.reshape(strip.shape)


def reflect_edges(
    canvas: Image.Image,
    source: Image.Image,
    offset: Tuple[int, int],
    vertical: bool,
    shuffle: bool = False,
    rng: Optional[np.random.Generator] = None,
) -> Image.Image:
    """
    Mirror the placed source across each open boundary of the canvas.

    Gaps wider than the source are filled by repeated reflection. Optionally,
    each reflected strip is shuffled to hide mirrored structure while
    preserving its colours.

    Args:
        canvas: Canvas with source already placed at offset
        source: The placed (resized) source image, same mode as canvas
        offset: (x, y) placement of source on canvas
        vertical: True to reflect across top/bottom, False for left/right
        shuffle: Permute pixels inside each reflected strip
        rng: Random generator used for shuffling

    Returns:
        New canvas with the reflections pasted in
    """
    before, after = open_sides(offset, source.size, canvas.size, vertical)
    if before == 0 and after == 0:
        return canvas.copy()
    if shuffle and rng is None:
        rng = np.random.default_rng()

    pixels = np.asarray(source)
    pad = [(0, 0)] * pixels.ndim
    pad[0 if vertical else 1] = (before, after)
    padded = np.pad(pixels, pad, mode="symmetric")

    result = canvas.copy()
    ox, oy = offset
    src_w, src_h = source.size
    strips = []
    if vertical:
        if before:
            strips.append((padded[:before], (ox, oy - before)))
        if after:
            strips.append((padded[before + src_h:], (ox, oy + src_h)))
    else:
        if before:
            strips.append((padded[:, :before], (ox - before, oy)))
        if after:
            strips.append((padded[:, before + src_w:], (ox + src_w, oy)))

    for strip, position in strips:
        if shuffle:
            strip = shuffle_pixels(strip, rng)
        result.paste(Image.fromarray(np.ascontiguousarray(strip)), position)

    logger.debug(
        f"Reflected {'vertically' if vertical else 'horizontally'}: "
        f"{before}px before, {after}px after (shuffle={shuffle})")
    return result


def stack_blur(image: Image.Image, radius: int) -> Image.Image:
    """Stack blur the whole image; radius 0 returns an unchanged copy"""
    if radius <= 0:
        return image.copy()
    kernel = 2 * radius + 1
    blurred = cv2.stackBlur(np.asarray(image), (kernel, kernel))
    return Image.fromarray(blurred)


def restore_center(
    composite: Image.Image,
    source: Image.Image,
    offset: Tuple[int, int],
    vertical: bool,
    inset: int,
) -> Image.Image:
    """
    Paste the unblurred source back over a blurred composite, inset by
    `inset` pixels along the extension axis so the blur only survives in
    the edge band.
    """
    src_w, src_h = source.size
    if vertical:
        box = (0, inset, src_w, src_h - inset)
    else:
        box = (inset, 0, src_w - inset, src_h)
    if box[2] <= box[0] or box[3] <= box[1]:
        logger.debug(f"Edge inset {inset} covers the whole source, nothing to restore")
        return composite.copy()

    result = composite.copy()
    result.paste(source.crop(box), (offset[0] + box[0], offset[1] + box[1]))
    return result
