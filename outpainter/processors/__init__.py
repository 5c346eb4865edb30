"""
Processors that synthesize canvas content and masks for outpainting
"""

from .edge_reflection import reflect_edges, restore_center, stack_blur
from .gradient_mask import build_gradient_mask

__all__ = [
    "reflect_edges",
    "restore_center",
    "stack_blur",
    "build_gradient_mask",
]
