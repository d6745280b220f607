"""
DXF Grouping - Parent/child contour detection
=============================================
Turns a flat list of primitives into cuttable parts.

Algorithm:
1. Keep closed contours that have a bounding box
2. Sort them by bounding-box area, largest first
3. Every unassigned contour becomes a parent and claims each other
   unassigned contour whose box center lies inside its polygon
"""

import logging
from typing import List, Optional, Sequence

from .entities import Primitive, Contour, EntityGroup
from .bounds import entity_bounding_box
from .contours import is_closed_contour, contains_point
from ..events import EventBus, EventType, emit

logger = logging.getLogger(__name__)

SOURCE = "grouping"


def collect_contours(
    primitives: Sequence[Primitive],
    tolerance: float = 1.0,
    observer: Optional[EventBus] = None
) -> List[Contour]:
    """
    Keep the closed primitives that have geometry.

    Args:
        primitives: Parsed drawing entities
        tolerance: Closure tolerance (mm)
        observer: Optional event bus for skipped entities

    Returns:
        Contours in input order
    """
    contours = []
    for index, primitive in enumerate(primitives):
        if not is_closed_contour(primitive, tolerance):
            emit(observer, EventType.ENTITY_SKIPPED, SOURCE,
                 index=index, entity_type=primitive.entity_type.value,
                 reason="open")
            continue

        bbox = entity_bounding_box(primitive)
        if bbox is None:
            emit(observer, EventType.ENTITY_SKIPPED, SOURCE,
                 index=index, entity_type=primitive.entity_type.value,
                 reason="no_geometry")
            continue

        contours.append(Contour(primitive=primitive, bounding_box=bbox))

    return contours


def group_contours(
    contours: Sequence[Contour],
    observer: Optional[EventBus] = None
) -> List[EntityGroup]:
    """
    Partition closed contours into parent/child groups.

    Each contour ends up in exactly one group, either as its parent or as
    one of its children. Grandchildren are absorbed by the outermost
    contour that reaches them first in area order.

    Args:
        contours: Closed contours with bounding boxes
        observer: Optional event bus

    Returns:
        Groups ordered by parent area, largest first
    """
    order = sorted(
        range(len(contours)),
        key=lambda i: contours[i].bounding_box.area,
        reverse=True
    )

    assigned = set()
    groups: List[EntityGroup] = []

    for i in order:
        if i in assigned:
            continue

        current = contours[i]
        assigned.add(i)
        children: List[Contour] = []

        for j in order:
            if j in assigned:
                continue

            other = contours[j]
            if contains_point(current.primitive, other.bounding_box.center):
                children.append(other)
                assigned.add(j)

        group = EntityGroup(parent=current, children=children)
        groups.append(group)

        emit(observer, EventType.GROUP_CREATED, SOURCE,
             entity_type=current.entity_type.value,
             children=len(children),
             width=current.bounding_box.width,
             height=current.bounding_box.height)

    return groups


def group_entities(
    primitives: Sequence[Primitive],
    tolerance: float = 1.0,
    observer: Optional[EventBus] = None
) -> List[EntityGroup]:
    """
    Group drawing primitives into cuttable parts.

    Open primitives (bare lines, arcs) are dropped.

    Args:
        primitives: Parsed drawing entities
        tolerance: Closure tolerance (mm)
        observer: Optional event bus

    Returns:
        List of EntityGroup, empty when nothing is closed
    """
    contours = collect_contours(primitives, tolerance, observer)
    groups = group_contours(contours, observer)

    child_count = sum(len(g.children) for g in groups)
    logger.debug(
        f"Grouped {len(primitives)} entities: {len(contours)} closed, "
        f"{len(groups)} groups, {child_count} cutouts"
    )

    return groups


__all__ = [
    'collect_contours',
    'group_contours',
    'group_entities',
]
