"""
Data models for the nesting engine.

Defines the layout records handed back to callers.
"""

import json
from functools import cached_property
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from sheetnest.config import settings
from sheetnest.core.dxf.entities import BoundingBox, EntityGroup
from sheetnest.core.exceptions import InvalidFieldValueError
from .geometry import group_bounding_box, rotated_bounding_box, validate_rotations

MM2_PER_M2 = 1_000_000.0


@dataclass(frozen=True)
class StockSheet:
    """Largest raw sheet available for a thickness bucket (mm)."""
    max_width: float
    max_height: float

    def to_dict(self) -> Dict:
        return {'max_width': self.max_width, 'max_height': self.max_height}


@dataclass
class NestingParams:
    """Tunable parameters of one nesting request."""
    spacing: float = field(default_factory=lambda: settings.MIN_SPACING_MM)
    cost_per_m2: float = field(default_factory=lambda: settings.METAL_COST_PER_M2)
    rotations: List[int] = field(default_factory=lambda: list(settings.DEFAULT_ROTATIONS))
    contour_tolerance: float = field(default_factory=lambda: settings.CONTOUR_TOLERANCE_MM)
    max_results: int = field(default_factory=lambda: settings.MAX_RESULTS)
    max_groups: Optional[int] = field(default_factory=lambda: settings.MAX_GROUPS)

    def __post_init__(self):
        if self.spacing < 0:
            raise InvalidFieldValueError('spacing', self.spacing, "must not be negative")
        if self.cost_per_m2 < 0:
            raise InvalidFieldValueError('cost_per_m2', self.cost_per_m2, "must not be negative")
        if self.contour_tolerance < 0:
            raise InvalidFieldValueError('contour_tolerance', self.contour_tolerance,
                                         "must not be negative")
        if self.max_results < 1:
            raise InvalidFieldValueError('max_results', self.max_results, "must be at least 1")
        if not self.rotations:
            raise InvalidFieldValueError('rotations', self.rotations, "at least one rotation required")
        self.rotations = validate_rotations(self.rotations)


@dataclass(frozen=True)
class PlacedGroup:
    """Group placed on the sheet; (x, y) is the offset of its footprint."""
    group: EntityGroup
    x: float
    y: float
    rotation: int = 0

    @cached_property
    def bounding_box(self) -> BoundingBox:
        """Unrotated union box of the group"""
        return group_bounding_box(self.group)

    @cached_property
    def footprint(self) -> BoundingBox:
        """Rotated box, anchored at the local origin"""
        return rotated_bounding_box(self.bounding_box, self.rotation)

    @property
    def width(self) -> float:
        return self.footprint.width

    @property
    def height(self) -> float:
        return self.footprint.height

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    def to_dict(self) -> Dict:
        bbox = self.bounding_box
        parent = self.group.parent.primitive
        return {
            'x': self.x,
            'y': self.y,
            'rotation': self.rotation,
            'width': self.width,
            'height': self.height,
            'parent_type': parent.entity_type.value,
            'parent_handle': parent.handle,
            'children': len(self.group.children),
            'source_box': bbox.to_dict(),
        }


@dataclass
class NestingResult:
    """One candidate layout on a single sheet."""
    sheet_width: float = 0.0
    sheet_height: float = 0.0
    placed_groups: List[PlacedGroup] = field(default_factory=list)
    efficiency: float = 0.0         # percent
    sheet_area_m2: float = 0.0
    used_area_m2: float = 0.0
    metal_cost: float = 0.0

    strategy: str = ""
    stock_sheet: Optional[StockSheet] = None
    unplaced_groups: List[EntityGroup] = field(default_factory=list)

    @property
    def placed_count(self) -> int:
        return len(self.placed_groups)

    @property
    def unplaced_count(self) -> int:
        return len(self.unplaced_groups)

    @property
    def sheet_size(self) -> Tuple[float, float]:
        return (self.sheet_width, self.sheet_height)

    def to_dict(self) -> Dict:
        return {
            'strategy': self.strategy,
            'sheet_width': self.sheet_width,
            'sheet_height': self.sheet_height,
            'efficiency': self.efficiency,
            'sheet_area_m2': self.sheet_area_m2,
            'used_area_m2': self.used_area_m2,
            'metal_cost': self.metal_cost,
            'stock_sheet': self.stock_sheet.to_dict() if self.stock_sheet else None,
            'placed_groups': [p.to_dict() for p in self.placed_groups],
            'unplaced_count': self.unplaced_count,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2)
