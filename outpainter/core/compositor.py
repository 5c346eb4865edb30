"""
Outpaint compositor

Turns a source image and a target size into a canvas of exactly the target
size plus a soft mask. The source is resized to fill one target axis,
pinned to its anchor, and the remaining space is filled with reflections of
the source; the mask marks that space (and a fading band over the source's
edge) for regeneration.
"""

import logging
from typing import Optional, Tuple

import numpy as np
from PIL import Image

from ..processors.edge_reflection import (open_sides, reflect_edges,
                                          restore_center, stack_blur)
from ..processors.gradient_mask import build_gradient_mask
from ..utils.dimension_calculator import fit_within
from ..utils.image_utils import (CANONICAL_FORMAT, decode_image, encode_png,
                                 ensure_png_mode, to_mode)
from .actions import resolve_action
from .aspect_catalog import AspectCatalog
from .condition import OutpaintCondition, ScaleAxis, classify_transform
from .config import OutpaintOptions
from .configuration_manager import ConfigurationManager
from .direction import Direction
from .result import CompositeResult


def placement_offset(
    anchor: Direction, size: Tuple[int, int], canvas_size: Tuple[int, int]
) -> Tuple[int, int]:
    """Where an image of size lands on the canvas for an anchor"""
    width, height = size
    canvas_w, canvas_h = canvas_size
    if anchor is Direction.CENTER:
        return canvas_w // 2 - width // 2, canvas_h // 2 - height // 2
    if anchor.is_upper_or_left:
        return 0, 0
    return canvas_w - width, canvas_h - height


class OutpaintCompositor:
    """Builds outpaint canvases and masks from encoded source images"""

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)
        config_manager = ConfigurationManager()
        self.canvas_mode = config_manager.get_value("output.canvas_mode")
        self.compress_level = config_manager.get_value("output.png_compress_level")

    def prepare(
        self,
        source: bytes,
        target_width: int,
        target_height: int,
        options: Optional[OutpaintOptions] = None,
    ) -> CompositeResult:
        """
        Prepare an outpaint canvas and mask.

        Args:
            source: Encoded source image
            target_width: Canvas width
            target_height: Canvas height
            options: Compositing options (defaults from config)

        Returns:
            CompositeResult. mask is None on the short-circuit paths: the
            source already has the target size, or resizing alone fills it.

        Raises:
            DecodeError: Source bytes cannot be decoded
            EncodeError: Canvas or mask cannot be encoded
            ValueError: Non-positive target dimensions
        """
        if target_width <= 0 or target_height <= 0:
            raise ValueError(
                f"Invalid target dimensions: {target_width}x{target_height}")
        if options is None:
            options = OutpaintOptions()
        target = (target_width, target_height)

        image, source_format, source_size = decode_image(source)

        if source_size == target:
            return self._passthrough(source, image, source_format, source_size)

        condition = classify_transform(
            source_size, target, options.anchor, self_correct=False)
        condition, scaled_size = self._fit(condition, source_size, target)
        condition = condition.corrected()
        if condition.anchor is not options.anchor:
            self.logger.debug(
                f"Anchor {options.anchor} cannot be honoured when scaling "
                f"{condition.scale_axis.value}ly, using {condition.anchor}")
        action = resolve_action(condition)
        vertical = condition.is_vertical_scale

        working = to_mode(image, self.canvas_mode)
        if scaled_size != source_size:
            resized = working.resize(scaled_size, Image.Resampling.LANCZOS)
        else:
            resized = working.copy()
        self.logger.debug(
            f"Resized {source_size[0]}x{source_size[1]} -> "
            f"{scaled_size[0]}x{scaled_size[1]} ({condition})")

        if scaled_size == target:
            canvas_bytes = encode_png(resized, self.compress_level, output="canvas")
            return CompositeResult(
                canvas=canvas_bytes,
                mask=None,
                source_size=source_size,
                source_format=source_format,
                scaled_size=scaled_size,
                target_size=target,
                condition=condition,
                action=action,
            )

        # Offsets given in source pixels grow with the canvas
        axis = 1 if vertical else 0
        scaled_ratio = target[axis] / scaled_size[axis]
        edge = int(options.edge_offset * scaled_ratio)
        blur = int(options.edge_blur * scaled_ratio)

        offset = placement_offset(condition.anchor, scaled_size, target)
        canvas = self._place(resized, target, offset)

        rng = np.random.default_rng(options.seed) if options.noise else None
        canvas = reflect_edges(canvas, resized, offset, vertical,
                               shuffle=options.noise, rng=rng)
        if blur > 0:
            canvas = stack_blur(canvas, blur)
            canvas = restore_center(canvas, resized, offset, vertical, edge)

        gaps = open_sides(offset, scaled_size, target, vertical)
        mask = build_gradient_mask(target, gaps, edge, vertical,
                                   options.mask_background)

        canvas_bytes = encode_png(canvas, self.compress_level, output="canvas")
        mask_bytes = encode_png(mask, self.compress_level, output="mask")

        self.logger.info(
            f"Prepared {action.value} outpaint: {source_size[0]}x{source_size[1]} "
            f"-> {target_width}x{target_height} (anchor {condition.anchor}, "
            f"gaps {gaps}, edge {edge}, blur {blur})")
        return CompositeResult(
            canvas=canvas_bytes,
            mask=mask_bytes,
            source_size=source_size,
            source_format=source_format,
            scaled_size=scaled_size,
            target_size=target,
            condition=condition,
            action=action,
        )

    def coerce(self, source: bytes, catalog: AspectCatalog) -> CompositeResult:
        """
        Resize an image to the aligned dimensions of its own aspect under the
        catalog's pixel budget, re-encoding as PNG when anything changed.
        """
        image, source_format, source_size = decode_image(source)
        scaled_size = catalog.nearest_aspect_wh(*source_size)
        if scaled_size[0] <= 0 or scaled_size[1] <= 0:
            raise ValueError(
                f"Cannot coerce {source_size[0]}x{source_size[1]} into "
                f"{catalog.max_pixels} pixels with step {catalog.dimension_step}")

        if scaled_size == source_size and source_format == CANONICAL_FORMAT:
            return self._passthrough(source, image, source_format, source_size)

        if scaled_size != source_size:
            image = ensure_png_mode(image).resize(scaled_size, Image.Resampling.LANCZOS)
            self.logger.debug(
                f"Coerced {source_size[0]}x{source_size[1]} -> "
                f"{scaled_size[0]}x{scaled_size[1]}")
        canvas_bytes = encode_png(ensure_png_mode(image), self.compress_level,
                                  output="canvas")
        return CompositeResult(
            canvas=canvas_bytes,
            mask=None,
            source_size=source_size,
            source_format=source_format,
            scaled_size=scaled_size,
            target_size=scaled_size,
        )

    def _passthrough(
        self,
        source: bytes,
        image: Image.Image,
        source_format: str,
        source_size: Tuple[int, int],
    ) -> CompositeResult:
        """Source already has the right size: reuse it, re-encoding only non-PNG"""
        if source_format == CANONICAL_FORMAT:
            self.logger.debug("Source already matches target, passing through")
            canvas, passthrough = source, True
        else:
            self.logger.debug(f"Source matches target, re-encoding {source_format} as PNG")
            canvas = encode_png(ensure_png_mode(image), self.compress_level,
                                output="canvas")
            passthrough = False
        return CompositeResult(
            canvas=canvas,
            mask=None,
            source_size=source_size,
            source_format=source_format,
            scaled_size=source_size,
            target_size=source_size,
            passthrough=passthrough,
        )

    def _fit(
        self,
        condition: OutpaintCondition,
        source_size: Tuple[int, int],
        target: Tuple[int, int],
    ) -> Tuple[OutpaintCondition, Tuple[int, int]]:
        """
        Scaled source size for the condition's axis. If matching that axis
        would push the other one past the target, the other axis is matched
        instead and the condition follows.
        """
        vertical = condition.is_vertical_scale
        scaled = fit_within(source_size, target, vertical)
        if scaled[0] <= target[0] and scaled[1] <= target[1]:
            return condition, scaled

        vertical = not vertical
        axis = ScaleAxis.VERTICAL if vertical else ScaleAxis.HORIZONTAL
        self.logger.debug(
            f"Scaling {condition.scale_axis.value} overflows {target}, "
            f"switching to {axis.value}")
        return condition.with_scale_axis(axis), fit_within(source_size, target, vertical)

    def _place(
        self, image: Image.Image, canvas_size: Tuple[int, int], offset: Tuple[int, int]
    ) -> Image.Image:
        """Blank canvas with image pasted at offset"""
        background = Image.new(self.canvas_mode, canvas_size)
        background.paste(image, offset)
        return background


def prepare_outpaint(
    source: bytes,
    target_width: int,
    target_height: int,
    options: Optional[OutpaintOptions] = None,
) -> CompositeResult:
    """Prepare an outpaint canvas and mask, see OutpaintCompositor.prepare"""
    return OutpaintCompositor().prepare(source, target_width, target_height, options)


def coerce_image(source: bytes, catalog: AspectCatalog) -> CompositeResult:
    """Coerce an image to catalog-aligned dimensions, see OutpaintCompositor.coerce"""
    return OutpaintCompositor().coerce(source, catalog)
