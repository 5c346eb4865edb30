"""
Result dataclasses for Outpainter operations
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from .actions import OutpaintAction
from .condition import OutpaintCondition


@dataclass
class CompositeResult:
    """Canvas and soft mask produced for one outpaint request"""
    canvas: bytes
    mask: Optional[bytes]
    source_size: Tuple[int, int]
    source_format: str
    scaled_size: Tuple[int, int]
    target_size: Tuple[int, int]
    condition: Optional[OutpaintCondition] = None
    action: OutpaintAction = OutpaintAction.NONE
    # True when the canvas is the untouched source bytes
    passthrough: bool = False

    @property
    def has_mask(self) -> bool:
        return self.mask is not None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization (image bytes excluded)"""
        return {
            "source_size": self.source_size,
            "source_format": self.source_format,
            "scaled_size": self.scaled_size,
            "target_size": self.target_size,
            "condition": str(self.condition) if self.condition else None,
            "action": self.action.value,
            "passthrough": self.passthrough,
            "canvas_bytes": len(self.canvas),
            "mask_bytes": len(self.mask) if self.mask is not None else 0,
        }
