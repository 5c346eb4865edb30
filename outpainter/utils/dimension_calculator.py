"""
Dimension Calculator - aligned dimensions for an aspect ratio under a pixel budget
"""

import logging
import math
from typing import Optional, Tuple

from ..core.configuration_manager import ConfigurationManager

logger = logging.getLogger(__name__)


def round_to_step(value: int, step: int) -> int:
    """
    Round value to the nearest multiple of step.

    A remainder below half a step (integer half) rounds down, anything else
    rounds up, so an exact half always rounds up.
    """
    if step <= 0:
        raise ValueError(f"Invalid alignment step: {step}")
    remainder = value % step
    if remainder == 0:
        return value
    if remainder < step // 2:
        return value - remainder
    return value + step - remainder


def nearest_aspect_wh(
    width: int, height: int, total_pixels: int, step: int
) -> Tuple[int, int]:
    """
    Find aligned dimensions with the proportions of width:height whose area
    is close to total_pixels.

    The dominant axis is sized first from the square root of the budget, the
    other axis follows from the exact ratio. Both are rounded to step, so the
    area can land slightly above the budget; see resolve_dimensions.

    Args:
        width: Ratio (or pixel) width
        height: Ratio (or pixel) height
        total_pixels: Pixel budget
        step: Alignment step

    Returns:
        (width, height) in pixels
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Invalid ratio: {width}:{height}")
    if total_pixels < 0:
        raise ValueError(f"Invalid pixel budget: {total_pixels}")

    if width / height > height / width:
        aligned_w = round_to_step(
            int(math.sqrt(total_pixels * width / height)), step)
        aligned_h = aligned_w * height // width
    else:
        aligned_h = round_to_step(
            int(math.sqrt(total_pixels * height / width)), step)
        aligned_w = aligned_h * width // height

    return round_to_step(aligned_w, step), round_to_step(aligned_h, step)


def resolve_dimensions(
    width: int,
    height: int,
    total_pixels: int,
    step: int,
    max_iterations: Optional[int] = None,
) -> Tuple[int, int]:
    """
    Resolve a ratio to aligned pixel dimensions that fit the pixel budget.

    When rounding pushes the area over budget, the working budget shrinks by
    step**2 per iteration until the area fits, the working budget runs out,
    or max_iterations is reached. In the last two cases the over-budget
    result is returned and callers are expected to filter it.

    Args:
        width: Ratio width
        height: Ratio height
        total_pixels: Pixel budget
        step: Alignment step
        max_iterations: Shrink iteration bound (config: catalog.max_shrink_iterations)

    Returns:
        (width, height) in pixels
    """
    if max_iterations is None:
        max_iterations = ConfigurationManager().get_value(
            "catalog.max_shrink_iterations")

    resolved_w, resolved_h = nearest_aspect_wh(width, height, total_pixels, step)
    shrink = step * step
    iteration = 0
    while resolved_w * resolved_h > total_pixels:
        iteration += 1
        budget = total_pixels - shrink * iteration
        if budget <= 0 or iteration > max_iterations:
            logger.debug(
                f"Gave up shrinking {width}:{height} after {iteration - 1} "
                f"iterations ({resolved_w}x{resolved_h} > {total_pixels})")
            break
        resolved_w, resolved_h = nearest_aspect_wh(width, height, budget, step)

    return resolved_w, resolved_h


def fit_within(
    source_size: Tuple[int, int], target_size: Tuple[int, int], vertical: bool
) -> Tuple[int, int]:
    """
    Scale source_size so one axis matches target_size exactly.

    Args:
        source_size: (width, height) of the source
        target_size: (width, height) of the target
        vertical: True to match the target width (the image then grows or
            shrinks vertically), False to match the target height

    Returns:
        (width, height) of the scaled source, the free axis rounded half up
    """
    src_w, src_h = source_size
    dst_w, dst_h = target_size
    if vertical:
        return dst_w, max(1, int(math.floor(dst_w * src_h / src_w + 0.5)))
    return max(1, int(math.floor(dst_h * src_w / src_h + 0.5))), dst_h
