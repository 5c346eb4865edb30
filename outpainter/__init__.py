"""
Outpainter - aspect ratio catalog and outpaint canvas preparation
"""

from ._version import __version__
from .core.actions import OutpaintAction, describe_action, resolve_action
from .core.aspect_catalog import AspectCatalog, AspectRatio, build_catalog
from .core.compositor import OutpaintCompositor, coerce_image, prepare_outpaint
from .core.condition import (OutpaintCondition, ScaleAxis, SizeRelation,
                             classify_transform)
from .core.config import OutpaintOptions
from .core.direction import Direction
from .core.exceptions import (AspectLookupError, DecodeError, EncodeError,
                              OutpainterError)
from .core.result import CompositeResult

__all__ = [
    "AspectCatalog",
    "AspectRatio",
    "build_catalog",
    "classify_transform",
    "OutpaintCondition",
    "ScaleAxis",
    "SizeRelation",
    "Direction",
    "OutpaintAction",
    "resolve_action",
    "describe_action",
    "OutpaintOptions",
    "OutpaintCompositor",
    "prepare_outpaint",
    "coerce_image",
    "CompositeResult",
    "OutpainterError",
    "DecodeError",
    "EncodeError",
    "AspectLookupError",
]
