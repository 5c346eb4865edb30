"""
Aspect ratio catalog

A catalog resolves a fixed list of canonical ratios to aligned pixel
dimensions for one (pixel budget, alignment step, bounds) tuple. It is built
once and never mutated afterwards, so it can be shared freely between callers.
"""

import logging
import math
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Sequence, Tuple

from ..utils.dimension_calculator import nearest_aspect_wh, resolve_dimensions
from .actions import OutpaintAction, OutpaintDescription, describe_action, resolve_action
from .condition import OutpaintCondition
from .configuration_manager import ConfigurationManager
from .direction import Direction
from .exceptions import AspectLookupError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AspectRatio:
    """A canonical ratio and its resolved dimensions within a catalog"""

    label: str
    width: int
    height: int
    width_pixels: int = 0
    height_pixels: int = 0
    catalog: Optional["AspectCatalog"] = field(
        default=None, compare=False, repr=False)

    @classmethod
    def parse(cls, label: str) -> "AspectRatio":
        """Parse a 'W:H' label into an unresolved ratio"""
        try:
            width_str, height_str = label.split(":")
            width, height = int(width_str), int(height_str)
        except ValueError:
            raise ValueError(
                f"Invalid aspect ratio label: {label!r}. Use W:H (e.g. 16:9)")
        if width <= 0 or height <= 0:
            raise ValueError(f"Invalid aspect ratio label: {label!r}")
        return cls(label=label, width=width, height=height)

    @property
    def size(self) -> Tuple[int, int]:
        return self.width_pixels, self.height_pixels

    @property
    def ratio(self) -> float:
        return self.width / self.height

    @property
    def is_resolved(self) -> bool:
        return self.width_pixels > 0 and self.height_pixels > 0

    def get_dimensions(self, total_pixels: Optional[int] = None) -> Tuple[int, int]:
        """
        Pixel dimensions of this ratio.

        The catalog's own budget returns the stored dimensions; any other
        budget is resolved with the owning catalog's step.
        """
        if self.catalog is None:
            raise ValueError(f"Aspect ratio {self.label} has no catalog")
        if total_pixels is None or total_pixels == self.catalog.max_pixels:
            if self.is_resolved:
                return self.size
            total_pixels = self.catalog.max_pixels
        return resolve_dimensions(
            self.width, self.height, total_pixels,
            self.catalog.dimension_step, self.catalog.max_shrink_iterations)

    def distance_to(self, width: int, height: int) -> float:
        """Euclidean distance between the resolved dimensions and a point"""
        return math.hypot(self.width_pixels - width, self.height_pixels - height)


@dataclass
class AspectOutpaints:
    """A candidate ratio and the actionable outpaints that reach it"""

    aspect_ratio: AspectRatio
    outpaints: List[OutpaintDescription] = field(default_factory=list)


class AspectCatalog:
    """Read-only table of canonical ratios resolved for one pixel budget"""

    def __init__(
        self,
        max_pixels: int,
        dimension_step: int,
        min_dimension: int,
        max_dimension: int,
        ratios: Sequence[str],
        max_shrink_iterations: int,
    ):
        if max_pixels <= 0:
            raise ValueError(f"Invalid pixel budget: {max_pixels}")
        if dimension_step <= 0:
            raise ValueError(f"Invalid alignment step: {dimension_step}")

        self._max_pixels = max_pixels
        self._dimension_step = dimension_step
        self._min_dimension = min_dimension
        self._max_dimension = max_dimension
        self._max_shrink_iterations = max_shrink_iterations

        table: Dict[str, AspectRatio] = {}
        reverse: Dict[Tuple[int, int], AspectRatio] = {}
        for label in ratios:
            if label in table:
                continue
            unresolved = AspectRatio.parse(label)
            width, height = resolve_dimensions(
                unresolved.width, unresolved.height, max_pixels,
                dimension_step, max_shrink_iterations)
            if not self.within_bounds(width, height):
                logger.debug(f"Excluding {label}: {width}x{height} out of bounds")
                continue
            if (width, height) in reverse:
                logger.debug(
                    f"Excluding {label}: {width}x{height} already taken by "
                    f"{reverse[(width, height)].label}")
                continue
            aspect = AspectRatio(
                label=label,
                width=unresolved.width,
                height=unresolved.height,
                width_pixels=width,
                height_pixels=height,
                catalog=self,
            )
            table[label] = aspect
            reverse[(width, height)] = aspect

        self._table = MappingProxyType(table)
        self._reverse = MappingProxyType(reverse)

    @property
    def max_pixels(self) -> int:
        return self._max_pixels

    @property
    def dimension_step(self) -> int:
        return self._dimension_step

    @property
    def min_dimension(self) -> int:
        return self._min_dimension

    @property
    def max_dimension(self) -> int:
        return self._max_dimension

    @property
    def max_shrink_iterations(self) -> int:
        return self._max_shrink_iterations

    @property
    def table(self) -> Mapping[str, AspectRatio]:
        return self._table

    @property
    def reverse_table(self) -> Mapping[Tuple[int, int], AspectRatio]:
        return self._reverse

    @property
    def labels(self) -> List[str]:
        return list(self._table)

    def __len__(self) -> int:
        return len(self._table)

    def __iter__(self) -> Iterator[AspectRatio]:
        return iter(self._table.values())

    def __contains__(self, label: object) -> bool:
        return label in self._table

    def __repr__(self) -> str:
        return (
            f"AspectCatalog(max_pixels={self._max_pixels}, "
            f"dimension_step={self._dimension_step}, "
            f"bounds=[{self._min_dimension}, {self._max_dimension}], "
            f"labels={self.labels})"
        )

    def within_bounds(self, width: int, height: int) -> bool:
        """True when both dims are in bounds and the area fits the budget"""
        return (
            self._min_dimension <= width <= self._max_dimension
            and self._min_dimension <= height <= self._max_dimension
            and width * height <= self._max_pixels
        )

    def get(self, label: str) -> AspectRatio:
        """Forward lookup - raises AspectLookupError for unknown labels"""
        try:
            return self._table[label]
        except KeyError:
            raise AspectLookupError(label, self.labels) from None

    def resolve_dimensions(
        self, label: str, pixel_budget: Optional[int] = None
    ) -> Tuple[int, int]:
        """Pixel dimensions of a labelled ratio under a pixel budget"""
        return self.get(label).get_dimensions(pixel_budget)

    def lookup(self, width: int, height: int) -> Optional[AspectRatio]:
        """Reverse lookup - exact pixel match only"""
        return self._reverse.get((width, height))

    def nearest(self, width: int, height: int) -> List[AspectRatio]:
        """All entries sorted by pixel distance to (width, height)"""
        # sorted() is stable, so ties keep catalog order
        return sorted(self, key=lambda aspect: aspect.distance_to(width, height))

    def nearest_aspect_wh(
        self, width: int, height: int, total_pixels: Optional[int] = None
    ) -> Tuple[int, int]:
        """Aligned dimensions for an arbitrary width:height under a budget"""
        if total_pixels is None:
            total_pixels = self._max_pixels
        return nearest_aspect_wh(width, height, total_pixels, self._dimension_step)

    def filter_by_outpaint(
        self,
        point: Tuple[int, int],
        candidates: Optional[Iterable[AspectRatio]] = None,
    ) -> List[AspectOutpaints]:
        """
        Candidates reachable from an image of size point, with the outpaint
        descriptions available toward each.

        Every anchor is tried against the raw classification (anchors are not
        self-corrected here), and only anchors whose action is not NONE are
        described. Candidates outside the catalog bounds or budget, or equal
        to point, are skipped.

        Args:
            point: (width, height) of the source image
            candidates: Ratios to consider, defaults to nearest(point)

        Returns:
            One AspectOutpaints per remaining candidate, in candidate order
        """
        if candidates is None:
            candidates = self.nearest(*point)

        filtered = []
        for aspect in candidates:
            if not self.within_bounds(aspect.width_pixels, aspect.height_pixels):
                continue
            if aspect.size == tuple(point):
                continue
            raw = OutpaintCondition.from_points(point, aspect.size)
            descriptions = []
            for direction in Direction:
                condition = raw.with_anchor(direction)
                action = resolve_action(condition)
                if action is not OutpaintAction.NONE:
                    descriptions.append(describe_action(action, condition))
            filtered.append(AspectOutpaints(aspect_ratio=aspect,
                                            outpaints=descriptions))
        return filtered


def build_catalog(
    max_pixels: Optional[int] = None,
    dimension_step: Optional[int] = None,
    min_dimension: Optional[int] = None,
    max_dimension: Optional[int] = None,
    ratios: Optional[Sequence[str]] = None,
) -> AspectCatalog:
    """
    Build an aspect catalog. Arguments left as None come from the catalog
    section of the configuration. Construction never fails on ratios that
    do not fit; they are filtered out.
    """
    config_manager = ConfigurationManager()
    if max_pixels is None:
        max_pixels = config_manager.get_value("catalog.max_pixels")
    if dimension_step is None:
        dimension_step = config_manager.get_value("catalog.dimension_step")
    if min_dimension is None:
        min_dimension = config_manager.get_value("catalog.min_dimension")
    if max_dimension is None:
        max_dimension = config_manager.get_value("catalog.max_dimension")
    if ratios is None:
        ratios = config_manager.get_value("catalog.ratios")

    catalog = AspectCatalog(
        max_pixels=max_pixels,
        dimension_step=dimension_step,
        min_dimension=min_dimension,
        max_dimension=max_dimension,
        ratios=ratios,
        max_shrink_iterations=config_manager.get_value(
            "catalog.max_shrink_iterations"),
    )
    logger.info(
        f"Built aspect catalog: {len(catalog)} ratios for {max_pixels} pixels "
        f"(step {dimension_step}, bounds {min_dimension}-{max_dimension})")
    for aspect in catalog:
        logger.debug(
            f"aspect ratio: {aspect.label} - "
            f"{aspect.width_pixels}x{aspect.height_pixels}")
    return catalog


def unique_by_label(aspects: Iterable[AspectRatio]) -> List[AspectRatio]:
    """Keep the first ratio for each label"""
    seen = set()
    unique = []
    for aspect in aspects:
        if aspect.label not in seen:
            seen.add(aspect.label)
            unique.append(aspect)
    return unique


def unique_by_dimensions(aspects: Iterable[AspectRatio]) -> List[AspectRatio]:
    """Keep the first ratio for each resolved (width, height)"""
    seen = set()
    unique = []
    for aspect in aspects:
        if aspect.size not in seen:
            seen.add(aspect.size)
            unique.append(aspect)
    return unique


def sort_by_resolution(aspects: Iterable[AspectRatio]) -> List[AspectRatio]:
    """Ratios ordered by resolved area, smallest first"""
    return sorted(aspects, key=lambda aspect: aspect.width_pixels * aspect.height_pixels)
