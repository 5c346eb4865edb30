"""
Main CLI entry point for Outpainter
"""

import argparse
import logging
import os
import sys
import traceback
from typing import List, Optional

from tqdm import tqdm

from ..core.actions import describe_action, resolve_action
from ..core.aspect_catalog import AspectCatalog, build_catalog
from ..core.compositor import OutpaintCompositor
from ..core.condition import classify_transform
from ..core.config import OutpaintOptions
from ..core.configuration_manager import ENV_PREFIX, ConfigurationManager
from ..core.exceptions import OutpainterError
from ..utils.logging_utils import setup_logger
from .args import create_parser, parse_resolution, validate_args
from .process import coerce_single_image, process_single_image
from .utils import expand_inputs, generate_output_path


def _build_catalog(args: argparse.Namespace) -> AspectCatalog:
    return build_catalog(
        max_pixels=args.max_pixels,
        dimension_step=args.step,
        min_dimension=args.min_dim,
        max_dimension=args.max_dim,
    )


def cmd_aspects(args: argparse.Namespace, logger: logging.Logger) -> int:
    """Print every catalog entry as '<label>  <w>x<h>'"""
    catalog = _build_catalog(args)
    for aspect in catalog:
        print(f"{aspect.label:>6}  {aspect.width_pixels}x{aspect.height_pixels}")
    return 0


def cmd_classify(args: argparse.Namespace, logger: logging.Logger) -> int:
    """Print the condition, action and description for one transform"""
    condition = classify_transform(
        args.source, args.target, args.anchor, self_correct=not args.no_correct)
    action = resolve_action(condition)
    description = describe_action(action, condition)

    print(f"condition: {condition}")
    print(f"action: {action.value}")
    if description is not None:
        print(f"outpaint: {description.scale_text} {description.glyphs}")
    return 0


def cmd_candidates(args: argparse.Namespace, logger: logging.Logger) -> int:
    """Print the nearest catalog ratios and the outpaints toward each"""
    catalog = _build_catalog(args)
    candidates = catalog.filter_by_outpaint(args.size)
    if args.limit:
        candidates = candidates[:args.limit]

    for candidate in candidates:
        aspect = candidate.aspect_ratio
        outpaints = ", ".join(
            f"{d.glyphs} ({d.anchor})" for d in candidate.outpaints)
        print(f"{aspect.label:>6}  {aspect.width_pixels}x{aspect.height_pixels}  "
              f"{outpaints or '-'}")
    return 0


def cmd_outpaint(args: argparse.Namespace, logger: logging.Logger) -> int:
    """Prepare canvases and masks for every input"""
    catalog = _build_catalog(args)
    try:
        target = parse_resolution(args.resolution, catalog)
    except argparse.ArgumentTypeError as e:
        raise ValueError(str(e)) from e

    input_files = expand_inputs(args.input)
    if args.output and len(input_files) > 1:
        raise ValueError("--output only works with a single input, use --output-dir")

    options = OutpaintOptions(
        anchor=args.anchor,
        mask_background=args.mask_background,
        edge_blur=args.blur,
        noise=args.noise,
        edge_offset=args.edge_offset,
        seed=args.seed,
    )
    compositor = OutpaintCompositor()
    logger.info(
        f"Processing {len(input_files)} image(s) -> {target[0]}x{target[1]}")

    success_count = 0
    for input_path in tqdm(input_files, desc="Outpainting", unit="image",
                           disable=len(input_files) < 2):
        if args.output:
            output_path = args.output
        else:
            output_path = generate_output_path(input_path, target, args.output_dir)
        if process_single_image(compositor, input_path, output_path, target,
                                options, logger):
            success_count += 1

    logger.info(
        f"Completed: {success_count}/{len(input_files)} images processed successfully")
    return 0 if success_count == len(input_files) else 1


def cmd_coerce(args: argparse.Namespace, logger: logging.Logger) -> int:
    """Coerce every input to catalog-aligned PNG"""
    catalog = _build_catalog(args)
    input_files = expand_inputs(args.input)
    compositor = OutpaintCompositor()

    success_count = 0
    for input_path in tqdm(input_files, desc="Coercing", unit="image",
                           disable=len(input_files) < 2):
        if coerce_single_image(compositor, input_path, args.output_dir,
                               catalog, logger):
            success_count += 1

    logger.info(
        f"Completed: {success_count}/{len(input_files)} images coerced successfully")
    return 0 if success_count == len(input_files) else 1


COMMANDS = {
    "aspects": cmd_aspects,
    "classify": cmd_classify,
    "candidates": cmd_candidates,
    "outpaint": cmd_outpaint,
    "coerce": cmd_coerce,
}


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point"""
    parser = create_parser()
    args = parser.parse_args(argv)

    logger = setup_logger("outpainter", level=logging.INFO)

    try:
        validate_args(args)

        if args.config:
            os.environ[f"{ENV_PREFIX}CONFIG_PATH"] = str(args.config)
            ConfigurationManager.reset()
        config_manager = ConfigurationManager()

        if args.verbose:
            log_level = logging.DEBUG
        else:
            log_level = config_manager.get_value("logging.level")
        logger = setup_logger("outpainter", level=log_level, log_file=args.log_file)

        return COMMANDS[args.command](args, logger)

    except KeyboardInterrupt:
        logger.info("\nProcessing interrupted by user")
        return 130
    except OutpainterError as e:
        logger.error(f"Outpainter Error: {e}")
        if e.stage:
            logger.error(f"  Stage: {e.stage}")
        return 1
    except ValueError as e:
        # Configuration and argument errors
        logger.error(f"Configuration Error: {e}")
        return 5
    except Exception as e:
        # Fail loud - don't hide unexpected errors
        logger.error("UNEXPECTED ERROR - THIS IS A BUG!")
        logger.error(f"Error type: {type(e).__name__}")
        logger.error(f"Error message: {e}")
        logger.error(traceback.format_exc())
        raise


if __name__ == "__main__":
    sys.exit(main())
