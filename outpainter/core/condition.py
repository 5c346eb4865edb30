"""
Outpaint conditions - how a source image relates to a target canvas
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Tuple, Union

from .direction import Direction


class ScaleAxis(Enum):
    """Axis the target exceeds the resized source on"""

    NONE = "none"
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


class SizeRelation(Enum):
    """Target area relative to a same-aspect source"""

    EQUAL = "equal"
    BIGGER = "bigger"
    SMALLER = "smaller"


@dataclass(frozen=True)
class OutpaintCondition:
    """
    Classification of a source -> target transform.

    scale_axis is HORIZONTAL when the canvas extends past the resized source
    on X, VERTICAL when it extends on Y, and NONE when both share an aspect
    ratio (same_aspect is then set and size_relation says which way to
    scale). The source_exceeds flags record which source axes are larger
    than the target; they play no part in choosing an action.
    """

    scale_axis: ScaleAxis = ScaleAxis.NONE
    anchor: Direction = Direction.CENTER
    same_aspect: bool = False
    size_relation: SizeRelation = SizeRelation.EQUAL
    source_exceeds_x: bool = False
    source_exceeds_y: bool = False

    @classmethod
    def from_points(
        cls, source: Tuple[int, int], target: Tuple[int, int]
    ) -> "OutpaintCondition":
        """
        Classify the relationship between two (width, height) pairs.

        Aspect ratios are compared as floats, so only exactly equal ratios
        count as the same aspect. When the aspects differ, the axis is picked
        by comparing raw pixel deltas; a tie falls through to the second
        branch of each comparison.
        """
        ax, ay = source
        bx, by = target
        if ax <= 0 or ay <= 0 or bx <= 0 or by <= 0:
            raise ValueError(
                f"Dimensions must be positive: {ax}x{ay} -> {bx}x{by}")

        aspect_a = ax / ay
        aspect_b = bx / by
        same_aspect = False
        size_relation = SizeRelation.EQUAL

        if aspect_a > aspect_b:
            if ax - bx > ay - by:
                axis = ScaleAxis.VERTICAL
            else:
                axis = ScaleAxis.HORIZONTAL
        elif aspect_a < aspect_b:
            if bx - ax > by - ay:
                axis = ScaleAxis.HORIZONTAL
            else:
                axis = ScaleAxis.VERTICAL
        else:
            axis = ScaleAxis.NONE
            same_aspect = True
            if ax * ay < bx * by:
                size_relation = SizeRelation.BIGGER
            elif ax * ay > bx * by:
                size_relation = SizeRelation.SMALLER

        return cls(
            scale_axis=axis,
            same_aspect=same_aspect,
            size_relation=size_relation,
            source_exceeds_x=ax > bx,
            source_exceeds_y=ay > by,
        )

    def with_anchor(self, anchor: Union[Direction, str]) -> "OutpaintCondition":
        """Copy of this condition anchored to a single direction"""
        if not isinstance(anchor, Direction):
            anchor = Direction.from_string(anchor)
        return replace(self, anchor=anchor)

    def with_scale_axis(self, axis: ScaleAxis) -> "OutpaintCondition":
        return replace(self, scale_axis=axis, same_aspect=False,
                       size_relation=SizeRelation.EQUAL)

    @property
    def is_vertical_scale(self) -> bool:
        return self.scale_axis is ScaleAxis.VERTICAL

    @property
    def is_horizontal_scale(self) -> bool:
        return self.scale_axis is ScaleAxis.HORIZONTAL

    @property
    def is_bigger(self) -> bool:
        return self.size_relation is SizeRelation.BIGGER

    @property
    def is_smaller(self) -> bool:
        return self.size_relation is SizeRelation.SMALLER

    @property
    def anchor_is_realizable(self) -> bool:
        """An anchor on the axis that is not being extended cannot be honoured"""
        if self.is_vertical_scale and self.anchor.is_horizontal:
            return False
        if self.is_horizontal_scale and self.anchor.is_vertical:
            return False
        return True

    def corrected(self) -> "OutpaintCondition":
        """Degrade an unrealizable anchor to center"""
        if self.anchor_is_realizable:
            return self
        return replace(self, anchor=Direction.CENTER)

    def __str__(self) -> str:
        parts = []
        if self.source_exceeds_x:
            parts.append("source-x")
        if self.source_exceeds_y:
            parts.append("source-y")
        if self.scale_axis is ScaleAxis.HORIZONTAL:
            parts.append("target-x")
        elif self.scale_axis is ScaleAxis.VERTICAL:
            parts.append("target-y")
        parts.append(f"anchor-{self.anchor.value}")
        if self.same_aspect:
            parts.append("same-aspect")
        if self.size_relation is not SizeRelation.EQUAL:
            parts.append(self.size_relation.value)
        return "|".join(parts)


def classify_transform(
    source: Tuple[int, int],
    target: Tuple[int, int],
    anchor: Union[Direction, str] = Direction.CENTER,
    self_correct: bool = True,
) -> OutpaintCondition:
    """
    Classify a source -> target transform with a requested anchor.

    Args:
        source: (width, height) of the source image
        target: (width, height) of the target canvas
        anchor: Requested anchor direction
        self_correct: Degrade an anchor orthogonal to the scale axis to center

    Returns:
        The resulting OutpaintCondition
    """
    condition = OutpaintCondition.from_points(source, target).with_anchor(anchor)
    if self_correct:
        condition = condition.corrected()
    return condition
