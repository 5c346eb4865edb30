"""
Command-line argument parsing for Outpainter
"""

import argparse
from pathlib import Path
from typing import Tuple

from .. import __version__
from ..core.aspect_catalog import AspectCatalog
from ..core.direction import Direction


def parse_size(size_str: str) -> Tuple[int, int]:
    """
    Parse a "WIDTHxHEIGHT" string into a tuple

    Raises:
        argparse.ArgumentTypeError: On malformed or non-positive sizes
    """
    try:
        width_str, height_str = size_str.lower().split("x")
        width, height = int(width_str), int(height_str)
    except ValueError:
        raise argparse.ArgumentTypeError(
            f"Invalid size: {size_str}. Use WIDTHxHEIGHT (e.g., 1024x768)")
    if width <= 0 or height <= 0:
        raise argparse.ArgumentTypeError(
            f"Invalid size: {size_str}. Dimensions must be positive")
    return width, height


def parse_resolution(resolution_str: str, catalog: AspectCatalog) -> Tuple[int, int]:
    """
    Parse a target resolution

    Supports formats:
    - "1344x768" - Explicit dimensions
    - "16:9" - Catalog label, resolved at the catalog's pixel budget

    Raises:
        AspectLookupError: Unknown catalog label
        argparse.ArgumentTypeError: Anything else that does not parse
    """
    if ":" in resolution_str:
        return catalog.resolve_dimensions(resolution_str.strip())
    return parse_size(resolution_str)


def _add_catalog_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--max-pixels", type=int,
        help="Pixel budget (default: catalog.max_pixels from config)")
    parser.add_argument(
        "--step", type=int,
        help="Dimension alignment step (default: catalog.dimension_step)")
    parser.add_argument(
        "--min-dim", type=int,
        help="Smallest allowed dimension (default: catalog.min_dimension)")
    parser.add_argument(
        "--max-dim", type=int,
        help="Largest allowed dimension (default: catalog.max_dimension)")


def create_parser() -> argparse.ArgumentParser:
    """Create the main argument parser"""

    parser = argparse.ArgumentParser(
        prog="outpainter",
        description="Aspect ratio catalog and outpaint canvas preparation",
        epilog="Examples:\n"
        "  outpainter aspects --max-pixels 1048576\n"
        "  outpainter classify 512x512 768x512 --anchor left\n"
        "  outpainter candidates 832x1216\n"
        "  outpainter outpaint photo.jpg -r 16:9 --blur 8\n"
        "  outpainter outpaint 'batch/*.png' -r 1344x768 --output-dir canvases/",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable verbose output"
    )
    parser.add_argument(
        "--log-file", type=Path, help="Also write logs to this file")
    parser.add_argument(
        "--config",
        type=Path,
        help="Use custom config file instead of ~/.config/outpainter/config.yaml",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}")

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    subparsers.required = True

    anchors = [d.value for d in Direction]

    # aspects
    aspects = subparsers.add_parser(
        "aspects", help="List the aspect ratio catalog")
    _add_catalog_arguments(aspects)

    # classify
    classify = subparsers.add_parser(
        "classify", help="Classify a source -> target transform")
    classify.add_argument("source", type=parse_size, help="Source size, WxH")
    classify.add_argument("target", type=parse_size, help="Target size, WxH")
    classify.add_argument(
        "--anchor", choices=anchors, default=Direction.CENTER.value,
        help="Requested anchor (default: center)")
    classify.add_argument(
        "--no-correct", action="store_true",
        help="Keep anchors the scale axis cannot honour")

    # candidates
    candidates = subparsers.add_parser(
        "candidates",
        help="Nearest catalog ratios and the outpaints that reach them")
    candidates.add_argument("size", type=parse_size, help="Image size, WxH")
    candidates.add_argument(
        "-n", "--limit", type=int, help="Show at most this many ratios")
    _add_catalog_arguments(candidates)

    # outpaint
    outpaint = subparsers.add_parser(
        "outpaint", help="Prepare outpaint canvases and masks")
    outpaint.add_argument(
        "input", type=Path, nargs="+",
        help="Input image paths or patterns (wildcards allowed)")
    outpaint.add_argument(
        "-r", "--resolution", type=str, required=True,
        help="Target resolution (e.g., 1344x768 or 16:9)")
    outpaint.add_argument(
        "--anchor", choices=anchors,
        help="Where to pin the source (default: outpaint.anchor)")
    outpaint.add_argument(
        "--blur", type=int, help="Edge blur radius (default: outpaint.edge_blur)")
    outpaint.add_argument(
        "--noise", action="store_true", default=None,
        help="Shuffle the reflected edges")
    outpaint.add_argument(
        "--edge-offset", type=int,
        help="Mask fade width over the source edge (default: outpaint.edge_offset)")
    outpaint.add_argument(
        "--mask-background", type=int,
        help="Mask level for preserved pixels, 0-255 (default: outpaint.mask_background)")
    outpaint.add_argument(
        "--seed", type=int, help="Random seed for --noise")
    outpaint.add_argument(
        "-o", "--output", type=Path,
        help="Canvas output path for a single input (default: <name>_<w>x<h>.png)")
    outpaint.add_argument(
        "--output-dir", type=Path, help="Output directory for batch processing")
    _add_catalog_arguments(outpaint)

    # coerce
    coerce = subparsers.add_parser(
        "coerce", help="Resize images to catalog-aligned dimensions as PNG")
    coerce.add_argument(
        "input", type=Path, nargs="+",
        help="Input image paths or patterns (wildcards allowed)")
    coerce.add_argument(
        "--output-dir", type=Path, help="Output directory")
    _add_catalog_arguments(coerce)

    return parser


def validate_args(args: argparse.Namespace) -> None:
    """
    Validate parsed arguments

    Raises:
        ValueError: If arguments are invalid
    """
    if getattr(args, "output", None) and getattr(args, "output_dir", None):
        raise ValueError("Cannot specify both --output and --output-dir")

    if getattr(args, "limit", None) is not None and args.limit <= 0:
        raise ValueError(f"--limit must be positive, got {args.limit}")

    if args.config and not args.config.exists():
        raise ValueError(
            f"Config file not found: {args.config}\n"
            f"Please check the file path and try again."
        )
