"""
Core DXF Module - Drawing primitives and part grouping
======================================================

Main components:
- DrawingReader: DXF text -> typed primitives (ezdxf)
- entity_bounding_box: bounding box of one primitive
- is_closed_contour: closed/open classification
- group_entities: parent/child contour grouping

Usage:
    from sheetnest.core.dxf import read_drawing, group_entities

    primitives = read_drawing(dxf_text)
    groups = group_entities(primitives)

    for group in groups:
        print(f"{group.parent.entity_type.value}: {len(group.children)} cutouts")
"""

from .entities import (
    EntityType,
    Point,
    Primitive,
    Line,
    Polyline,
    Circle,
    Arc,
    Spline,
    Ellipse,
    BoundingBox,
    Contour,
    EntityGroup,
)

from .bounds import entity_bounding_box

from .contours import (
    is_closed_contour,
    point_in_polygon,
    is_container,
    contains_point,
)

from .converters import convert_entity

from .layer_filters import (
    IGNORE_LAYERS,
    is_ignored_layer,
)

from .grouping import (
    collect_contours,
    group_contours,
    group_entities,
)

from .reader import (
    DrawingReader,
    read_drawing,
)


__all__ = [
    # Entities
    'EntityType',
    'Point',
    'Primitive',
    'Line',
    'Polyline',
    'Circle',
    'Arc',
    'Spline',
    'Ellipse',
    'BoundingBox',
    'Contour',
    'EntityGroup',

    # Geometry
    'entity_bounding_box',
    'is_closed_contour',
    'point_in_polygon',
    'is_container',
    'contains_point',

    # Converters / Reader
    'convert_entity',
    'IGNORE_LAYERS',
    'is_ignored_layer',
    'DrawingReader',
    'read_drawing',

    # Grouping
    'collect_contours',
    'group_contours',
    'group_entities',
]
