"""
DXF Entities - Typed primitives of a cut drawing
================================================
Immutable data structures produced by the converters and consumed by the
grouper and the nesting engine.
"""

import math
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Tuple
from enum import Enum

Point = Tuple[float, float]


class EntityType(Enum):
    """DXF entity types"""
    LINE = "LINE"
    ARC = "ARC"
    CIRCLE = "CIRCLE"
    LWPOLYLINE = "LWPOLYLINE"
    POLYLINE = "POLYLINE"
    SPLINE = "SPLINE"
    ELLIPSE = "ELLIPSE"
    OTHER = "OTHER"


POLYLINE_TYPES = (EntityType.LWPOLYLINE, EntityType.POLYLINE)


@dataclass(frozen=True)
class Primitive:
    """
    Single drawing entity.
    Subclasses carry the geometry; a bare Primitive stands for an entity
    type the engine does not understand.
    """
    entity_type: EntityType = EntityType.OTHER
    layer: str = "0"
    handle: str = ""


@dataclass(frozen=True)
class Line(Primitive):
    start: Point = (0.0, 0.0)
    end: Point = (0.0, 0.0)
    entity_type: EntityType = EntityType.LINE


@dataclass(frozen=True)
class Polyline(Primitive):
    """LWPOLYLINE or POLYLINE. `closed` is DXF flag bit 1 (the closed/shape flag)."""
    vertices: Tuple[Point, ...] = ()
    closed: bool = False
    entity_type: EntityType = EntityType.LWPOLYLINE


@dataclass(frozen=True)
class Circle(Primitive):
    center: Point = (0.0, 0.0)
    radius: float = 0.0
    entity_type: EntityType = EntityType.CIRCLE


@dataclass(frozen=True)
class Arc(Primitive):
    """Angles in degrees, counter-clockwise from start to end"""
    center: Point = (0.0, 0.0)
    radius: float = 0.0
    start_angle: float = 0.0
    end_angle: float = 360.0
    entity_type: EntityType = EntityType.ARC


@dataclass(frozen=True)
class Spline(Primitive):
    control_points: Tuple[Point, ...] = ()
    closed: bool = False
    entity_type: EntityType = EntityType.SPLINE


@dataclass(frozen=True)
class Ellipse(Primitive):
    """major_axis is the vector from center to the end of the major axis"""
    center: Point = (0.0, 0.0)
    major_axis: Point = (1.0, 0.0)
    ratio: float = 1.0
    entity_type: EntityType = EntityType.ELLIPSE


@dataclass(frozen=True)
class BoundingBox:
    """Axis-aligned bounding box in mm"""
    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    @property
    def area(self) -> float:
        return self.width * self.height

    @property
    def center(self) -> Point:
        return ((self.min_x + self.max_x) / 2, (self.min_y + self.max_y) / 2)

    def contains_box(self, other: "BoundingBox") -> bool:
        return (self.min_x <= other.min_x and self.min_y <= other.min_y and
                self.max_x >= other.max_x and self.max_y >= other.max_y)

    @classmethod
    def from_points(cls, points: Iterable[Point]) -> Optional["BoundingBox"]:
        """Box around all finite points, None if there are none"""
        min_x = min_y = math.inf
        max_x = max_y = -math.inf

        for x, y in points:
            if not (math.isfinite(x) and math.isfinite(y)):
                continue
            min_x = min(min_x, x)
            min_y = min(min_y, y)
            max_x = max(max_x, x)
            max_y = max(max_y, y)

        if not math.isfinite(min_x):
            return None

        return cls(min_x, min_y, max_x, max_y)

    @classmethod
    def union(cls, boxes: Iterable["BoundingBox"]) -> Optional["BoundingBox"]:
        """Smallest box covering every given box"""
        boxes = list(boxes)
        if not boxes:
            return None
        return cls(
            min(b.min_x for b in boxes),
            min(b.min_y for b in boxes),
            max(b.max_x for b in boxes),
            max(b.max_y for b in boxes),
        )

    def to_dict(self) -> dict:
        return {
            'min_x': self.min_x,
            'min_y': self.min_y,
            'max_x': self.max_x,
            'max_y': self.max_y,
            'width': self.width,
            'height': self.height,
        }


@dataclass(frozen=True)
class Contour:
    """Closed primitive together with its bounding box"""
    primitive: Primitive
    bounding_box: BoundingBox

    @property
    def entity_type(self) -> EntityType:
        return self.primitive.entity_type


@dataclass
class EntityGroup:
    """
    Cuttable part: an outer contour and the cutouts found inside it.
    Always exactly two levels deep.
    """
    parent: Contour
    children: List[Contour] = field(default_factory=list)

    @property
    def members(self) -> List[Contour]:
        return [self.parent] + list(self.children)

    @property
    def is_singleton(self) -> bool:
        return not self.children
