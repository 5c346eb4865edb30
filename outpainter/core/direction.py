"""
Anchor directions for outpainting
"""

from enum import Enum
from typing import Tuple


class Direction(Enum):
    """Edge or center a source image is pinned to on a larger canvas"""

    CENTER = "center"
    RIGHT = "right"
    LEFT = "left"
    DOWN = "down"
    UP = "up"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def from_string(cls, value: str) -> "Direction":
        """Parse a direction name, case insensitive"""
        try:
            return cls(value.strip().lower())
        except ValueError:
            raise ValueError(
                f"Invalid direction: {value!r}. "
                f"Valid directions: {[d.value for d in cls]}"
            )

    @property
    def vector(self) -> Tuple[int, int]:
        """Unit (x, y) offset in image coordinates"""
        return _DIRECTION_VECTORS[self]

    @property
    def is_horizontal(self) -> bool:
        return self in (Direction.LEFT, Direction.RIGHT)

    @property
    def is_vertical(self) -> bool:
        return self in (Direction.UP, Direction.DOWN)

    @property
    def is_upper_or_left(self) -> bool:
        return self in (Direction.UP, Direction.LEFT)

    @property
    def is_lower_or_right(self) -> bool:
        return self in (Direction.DOWN, Direction.RIGHT)


_DIRECTION_VECTORS = {
    Direction.CENTER: (0, 0),
    Direction.RIGHT: (1, 0),
    Direction.LEFT: (-1, 0),
    Direction.UP: (0, -1),
    Direction.DOWN: (0, 1),
}
