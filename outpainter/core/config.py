"""
Options for outpaint compositing
ALL defaults come from the outpaint section of the configuration
"""

from dataclasses import dataclass, fields
from typing import Optional, Union

from .configuration_manager import ConfigurationManager
from .direction import Direction


@dataclass
class OutpaintOptions:
    """
    Options for prepare_outpaint. Fields left as None are filled from
    config (outpaint.*); seed stays None unless given.
    """

    anchor: Optional[Union[Direction, str]] = None
    mask_background: Optional[int] = None
    edge_blur: Optional[int] = None
    noise: Optional[bool] = None
    edge_offset: Optional[int] = None
    seed: Optional[int] = None

    def __post_init__(self):
        config_manager = ConfigurationManager()
        for field_info in fields(self):
            if field_info.name == "seed":
                continue
            if getattr(self, field_info.name) is None:
                setattr(self, field_info.name,
                        config_manager.get_value(f"outpaint.{field_info.name}"))

        if not isinstance(self.anchor, Direction):
            self.anchor = Direction.from_string(str(self.anchor))

        self._validate()

    def _validate(self):
        """FAIL LOUD on values the compositor cannot honour"""
        if not 0 <= self.mask_background <= 255:
            raise ValueError(
                f"mask_background must be within 0-255, got {self.mask_background}")
        if self.edge_blur < 0:
            raise ValueError(f"edge_blur must be non-negative, got {self.edge_blur}")
        if self.edge_offset < 0:
            raise ValueError(
                f"edge_offset must be non-negative, got {self.edge_offset}")
