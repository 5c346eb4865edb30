"""
Outpaint actions - what to do for a classified condition
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Dict, Optional, Tuple

from .condition import OutpaintCondition, ScaleAxis, SizeRelation
from .direction import Direction


class OutpaintAction(Enum):
    NONE = "none"
    SCALE_UP = "scale_up"
    SCALE_DOWN = "scale_down"
    CENTER_HORIZONTAL = "center_horizontal"
    CENTER_VERTICAL = "center_vertical"
    TO_RIGHT = "to_right"
    TO_LEFT = "to_left"
    TO_TOP = "to_top"
    TO_BOTTOM = "to_bottom"


_VERTICAL_ACTIONS = {
    Direction.CENTER: OutpaintAction.CENTER_VERTICAL,
    Direction.UP: OutpaintAction.TO_BOTTOM,
    Direction.DOWN: OutpaintAction.TO_TOP,
}

_HORIZONTAL_ACTIONS = {
    Direction.CENTER: OutpaintAction.CENTER_HORIZONTAL,
    Direction.RIGHT: OutpaintAction.TO_LEFT,
    Direction.LEFT: OutpaintAction.TO_RIGHT,
}


def resolve_action(condition: OutpaintCondition) -> OutpaintAction:
    """
    Map a condition to its action. Combinations without an action (e.g. an
    anchor orthogonal to the scale axis) resolve to OutpaintAction.NONE.
    """
    if condition.same_aspect:
        if condition.anchor is not Direction.CENTER:
            return OutpaintAction.NONE
        if condition.size_relation is SizeRelation.BIGGER:
            return OutpaintAction.SCALE_UP
        if condition.size_relation is SizeRelation.SMALLER:
            return OutpaintAction.SCALE_DOWN
        return OutpaintAction.NONE
    if condition.scale_axis is ScaleAxis.VERTICAL:
        return _VERTICAL_ACTIONS.get(condition.anchor, OutpaintAction.NONE)
    if condition.scale_axis is ScaleAxis.HORIZONTAL:
        return _HORIZONTAL_ACTIONS.get(condition.anchor, OutpaintAction.NONE)
    return OutpaintAction.NONE


@dataclass(frozen=True)
class OutpaintDescription:
    """User facing description of an outpaint action"""

    action: OutpaintAction
    anchor: Direction
    scale_text: str
    scale_glyphs: str
    source_glyphs: str
    dest_glyphs: str
    expand_directions: Tuple[Direction, ...] = ()
    shrink_directions: Tuple[Direction, ...] = ()
    condition: Optional[OutpaintCondition] = field(default=None, compare=False)

    @property
    def glyphs(self) -> str:
        if self.anchor is Direction.RIGHT:
            return f"{self.scale_glyphs}{self.source_glyphs} ⇨ {self.dest_glyphs}"
        return f"{self.source_glyphs}{self.scale_glyphs} ⇨ {self.dest_glyphs}"

    def __str__(self) -> str:
        return self.glyphs


_ALL_SIDES = (Direction.UP, Direction.DOWN, Direction.LEFT, Direction.RIGHT)

OUTPAINT_DESCRIPTIONS: Dict[OutpaintAction, OutpaintDescription] = {
    OutpaintAction.SCALE_UP: OutpaintDescription(
        action=OutpaintAction.SCALE_UP,
        anchor=Direction.CENTER,
        expand_directions=_ALL_SIDES,
        scale_text="Upscale image",
        scale_glyphs="⤡",
        source_glyphs="■",
        dest_glyphs="█",
    ),
    OutpaintAction.SCALE_DOWN: OutpaintDescription(
        action=OutpaintAction.SCALE_DOWN,
        anchor=Direction.CENTER,
        shrink_directions=_ALL_SIDES,
        scale_text="Downscale image",
        scale_glyphs="↘↖",
        source_glyphs="█",
        dest_glyphs="■",
    ),
    OutpaintAction.CENTER_HORIZONTAL: OutpaintDescription(
        action=OutpaintAction.CENTER_HORIZONTAL,
        anchor=Direction.CENTER,
        expand_directions=(Direction.LEFT, Direction.RIGHT),
        scale_text="Outpaint left & right",
        scale_glyphs="⇆",
        source_glyphs="▮",
        dest_glyphs="█",
    ),
    OutpaintAction.CENTER_VERTICAL: OutpaintDescription(
        action=OutpaintAction.CENTER_VERTICAL,
        anchor=Direction.CENTER,
        expand_directions=(Direction.UP, Direction.DOWN),
        scale_text="Outpaint up & down",
        scale_glyphs="⇅",
        source_glyphs="█",
        dest_glyphs="▮",
    ),
    OutpaintAction.TO_RIGHT: OutpaintDescription(
        action=OutpaintAction.TO_RIGHT,
        anchor=Direction.LEFT,
        expand_directions=(Direction.RIGHT,),
        scale_text="Outpaint right",
        scale_glyphs="→",
        source_glyphs="▐",
        dest_glyphs="█",
    ),
    OutpaintAction.TO_LEFT: OutpaintDescription(
        action=OutpaintAction.TO_LEFT,
        anchor=Direction.RIGHT,
        expand_directions=(Direction.LEFT,),
        scale_text="Outpaint left",
        scale_glyphs="←",
        source_glyphs="▌",
        dest_glyphs="█",
    ),
    OutpaintAction.TO_BOTTOM: OutpaintDescription(
        action=OutpaintAction.TO_BOTTOM,
        anchor=Direction.UP,
        expand_directions=(Direction.DOWN,),
        scale_text="Outpaint down",
        scale_glyphs="↓",
        source_glyphs="▀",
        dest_glyphs="█",
    ),
    OutpaintAction.TO_TOP: OutpaintDescription(
        action=OutpaintAction.TO_TOP,
        anchor=Direction.DOWN,
        expand_directions=(Direction.UP,),
        scale_text="Outpaint up",
        scale_glyphs="↑",
        source_glyphs="▄",
        dest_glyphs="█",
    ),
}


def describe_action(
    action: OutpaintAction, condition: Optional[OutpaintCondition] = None
) -> Optional[OutpaintDescription]:
    """Description for an action, tagged with its condition; None for NONE"""
    description = OUTPAINT_DESCRIPTIONS.get(action)
    if description is None:
        return None
    return replace(description, condition=condition)
