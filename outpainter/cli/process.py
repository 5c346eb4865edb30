"""
Process single image functions for CLI
"""

import logging
from pathlib import Path
from typing import List, Tuple

from ..core.aspect_catalog import AspectCatalog
from ..core.compositor import OutpaintCompositor
from ..core.config import OutpaintOptions
from ..core.exceptions import OutpainterError
from .utils import generate_output_path, mask_path_for


def _write(path: Path, data: bytes) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)


def _write_all(files: List[Tuple[Path, bytes]]) -> None:
    """Write files in order; on failure remove the ones already written"""
    written = []
    try:
        for path, data in files:
            _write(path, data)
            written.append(path)
    except OSError:
        for path in written:
            path.unlink(missing_ok=True)
        raise


def process_single_image(
    compositor: OutpaintCompositor,
    input_path: Path,
    output_path: Path,
    target: Tuple[int, int],
    options: OutpaintOptions,
    logger: logging.Logger,
) -> bool:
    """
    Prepare one outpaint canvas (and mask) and write them to disk

    Args:
        compositor: OutpaintCompositor instance
        input_path: Input image path
        output_path: Canvas output path; the mask goes beside it
        target: Target (width, height)
        options: Compositing options
        logger: Logger instance

    Returns:
        True if successful, False otherwise
    """
    try:
        logger.info(f"Processing: {input_path} -> {output_path}")
        result = compositor.prepare(
            input_path.read_bytes(), target[0], target[1], options)

        if result.has_mask:
            mask_path = mask_path_for(output_path)
            # Never leave a canvas without its mask
            _write_all([(mask_path, result.mask), (output_path, result.canvas)])
            logger.info(f"✓ Saved canvas {output_path} and mask {mask_path}")
        else:
            _write(output_path, result.canvas)
            logger.info(f"✓ Saved {output_path} (no outpainting needed)")
        logger.debug(f"Result: {result.to_dict()}")
        return True

    except (OutpainterError, OSError) as e:
        logger.error(f"Failed to process {input_path}: {e}")
        if getattr(e, "stage", None):
            logger.error(f"  Stage: {e.stage}")
        return False


def coerce_single_image(
    compositor: OutpaintCompositor,
    input_path: Path,
    output_dir: Path,
    catalog: AspectCatalog,
    logger: logging.Logger,
) -> bool:
    """
    Coerce one image to catalog-aligned dimensions and write it as PNG

    Returns:
        True if successful, False otherwise
    """
    try:
        result = compositor.coerce(input_path.read_bytes(), catalog)
        output_path = generate_output_path(
            input_path, result.scaled_size, output_dir)
        _write(output_path, result.canvas)
        logger.info(
            f"✓ {input_path.name}: {result.source_size[0]}x{result.source_size[1]} "
            f"-> {result.scaled_size[0]}x{result.scaled_size[1]}, saved {output_path}")
        return True

    except (OutpainterError, ValueError, OSError) as e:
        logger.error(f"Failed to coerce {input_path}: {e}")
        return False
