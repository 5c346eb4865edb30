"""
CLI utility functions
"""

import glob
from pathlib import Path
from typing import List, Optional, Sequence, Tuple


def expand_inputs(patterns: Sequence[Path]) -> List[Path]:
    """
    Expand wildcard patterns into input files

    Raises:
        ValueError: If a plain path does not exist or a pattern matches nothing
    """
    input_files = []
    for pattern in patterns:
        if any(c in str(pattern) for c in "*?["):
            matches = sorted(Path(f) for f in glob.glob(str(pattern)))
            if not matches:
                raise ValueError(f"No files matching pattern: {pattern}")
            input_files.extend(matches)
        elif not pattern.exists():
            raise ValueError(
                f"File not found: {pattern}\n"
                f"Please check the file path and try again."
            )
        else:
            input_files.append(pattern)
    return input_files


def generate_output_path(
    input_path: Path,
    resolution: Tuple[int, int],
    output_dir: Optional[Path] = None,
) -> Path:
    """
    Generate output path based on input and target size

    Args:
        input_path: Input file path
        resolution: Target resolution tuple
        output_dir: Output directory (optional, defaults to the input's)

    Returns:
        <output_dir>/<stem>_<w>x<h>.png
    """
    base_dir = output_dir if output_dir else input_path.parent
    width, height = resolution
    return base_dir / f"{input_path.stem}_{width}x{height}.png"


def mask_path_for(canvas_path: Path) -> Path:
    """Mask file written beside a canvas: <stem>_mask.png"""
    return canvas_path.with_name(f"{canvas_path.stem}_mask.png")
