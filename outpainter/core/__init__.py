"""
Core components of Outpainter
"""

from .actions import OutpaintAction, OutpaintDescription
from .aspect_catalog import AspectCatalog, AspectOutpaints, AspectRatio
from .compositor import OutpaintCompositor
from .condition import OutpaintCondition, ScaleAxis, SizeRelation
from .config import OutpaintOptions
from .configuration_manager import ConfigurationManager
from .direction import Direction
from .exceptions import (AspectLookupError, DecodeError, EncodeError,
                         OutpainterError)
from .result import CompositeResult

__all__ = [
    "AspectCatalog",
    "AspectOutpaints",
    "AspectRatio",
    "ConfigurationManager",
    "CompositeResult",
    "Direction",
    "OutpaintAction",
    "OutpaintCompositor",
    "OutpaintCondition",
    "OutpaintDescription",
    "OutpaintOptions",
    "ScaleAxis",
    "SizeRelation",
    "OutpainterError",
    "DecodeError",
    "EncodeError",
    "AspectLookupError",
]
