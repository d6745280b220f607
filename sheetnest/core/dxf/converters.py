"""
DXF Entity Converters - ezdxf entities to primitives
====================================================
Supports: LINE, ARC, CIRCLE, LWPOLYLINE, POLYLINE, SPLINE, ELLIPSE
"""

import logging
from typing import Optional

from ezdxf.lldxf.const import DXFError

from .entities import (
    Primitive, Line, Polyline, Circle, Arc, Spline, Ellipse, EntityType,
)

logger = logging.getLogger(__name__)

# Types without cut geometry, ignored without a log message
NON_GEOMETRY_TYPES = {'POINT', 'TEXT', 'MTEXT', 'DIMENSION', 'INSERT', 'HATCH', 'SOLID'}


def _xy(vec) -> tuple:
    return (float(vec[0]), float(vec[1]))


def _common(entity) -> dict:
    return {
        'layer': entity.dxf.get('layer', '0'),
        'handle': entity.dxf.get('handle', '') or '',
    }


def convert_line(entity) -> Line:
    """Convert a LINE entity"""
    return Line(
        start=_xy(entity.dxf.start),
        end=_xy(entity.dxf.end),
        **_common(entity)
    )


def convert_arc(entity) -> Arc:
    """Convert an ARC entity"""
    return Arc(
        center=_xy(entity.dxf.center),
        radius=float(entity.dxf.radius),
        start_angle=float(entity.dxf.start_angle),
        end_angle=float(entity.dxf.end_angle),
        **_common(entity)
    )


def convert_circle(entity) -> Circle:
    """Convert a CIRCLE entity"""
    return Circle(
        center=_xy(entity.dxf.center),
        radius=float(entity.dxf.radius),
        **_common(entity)
    )


def convert_lwpolyline(entity) -> Polyline:
    """Convert an LWPOLYLINE entity (bulges are ignored, vertices only)"""
    vertices = tuple(_xy(p) for p in entity.get_points('xy'))
    return Polyline(
        vertices=vertices,
        closed=bool(entity.closed),
        entity_type=EntityType.LWPOLYLINE,
        **_common(entity)
    )


def convert_polyline(entity) -> Optional[Polyline]:
    """Convert a 2D/3D POLYLINE; meshes and polyfaces are skipped"""
    if not (entity.is_2d_polyline or entity.is_3d_polyline):
        logger.debug("Skipping POLYLINE mesh/polyface")
        return None

    vertices = tuple(_xy(v.dxf.location) for v in entity.vertices)
    return Polyline(
        vertices=vertices,
        closed=bool(entity.is_closed),
        entity_type=EntityType.POLYLINE,
        **_common(entity)
    )


def convert_spline(entity) -> Spline:
    """Convert a SPLINE entity (control points, not the evaluated curve)"""
    control_points = tuple(_xy(p) for p in entity.control_points)
    if not control_points:
        # Fit-point-only splines carry no control points
        control_points = tuple(_xy(p) for p in entity.fit_points)

    return Spline(
        control_points=control_points,
        closed=bool(entity.closed),
        **_common(entity)
    )


def convert_ellipse(entity) -> Ellipse:
    """Convert an ELLIPSE entity"""
    return Ellipse(
        center=_xy(entity.dxf.center),
        major_axis=_xy(entity.dxf.major_axis),
        ratio=float(entity.dxf.ratio),
        **_common(entity)
    )


CONVERTERS = {
    'LINE': convert_line,
    'ARC': convert_arc,
    'CIRCLE': convert_circle,
    'LWPOLYLINE': convert_lwpolyline,
    'POLYLINE': convert_polyline,
    'SPLINE': convert_spline,
    'ELLIPSE': convert_ellipse,
}


def convert_entity(entity) -> Optional[Primitive]:
    """
    Convert any ezdxf entity.

    Args:
        entity: ezdxf graphic entity

    Returns:
        Primitive, or None for unsupported types and broken entities
    """
    etype = entity.dxftype()

    converter = CONVERTERS.get(etype)
    if converter:
        try:
            return converter(entity)
        except (DXFError, AttributeError, TypeError, ValueError, IndexError) as e:
            logger.warning(f"Error converting {etype}: {e}")
            return None

    if etype not in NON_GEOMETRY_TYPES:
        logger.debug(f"Unsupported entity type: {etype}")

    return None


__all__ = [
    'convert_line',
    'convert_arc',
    'convert_circle',
    'convert_lwpolyline',
    'convert_polyline',
    'convert_spline',
    'convert_ellipse',
    'convert_entity',
]
