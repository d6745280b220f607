"""
DXF export of a nesting layout.

Layers:
- SHEET: realised sheet outline
- FOOTPRINT: footprint rectangle of every placed group
- CUT: parent contours, moved and rotated into place
- HOLES: child contours
"""

import io
import os
import math
import logging
from typing import List

import ezdxf
from ezdxf.math import Matrix44

from sheetnest.core.dxf.entities import (
    Primitive, Line, Polyline, Circle, Arc, Spline, Ellipse,
)
from sheetnest.core.exceptions import ExportError
from .models import NestingResult, PlacedGroup

logger = logging.getLogger(__name__)

LAYER_COLORS = {
    'SHEET': 7,
    'FOOTPRINT': 8,
    'CUT': 3,
    'HOLES': 1,
}


def placement_matrix(placed: PlacedGroup) -> Matrix44:
    """Transform from drawing coordinates to sheet coordinates"""
    bbox = placed.bounding_box
    w, h = bbox.width, bbox.height

    to_origin = Matrix44.translate(-bbox.min_x, -bbox.min_y, 0)
    rotate = Matrix44.z_rotate(math.radians(placed.rotation))
    reanchor = {
        0: (0, 0),
        90: (h, 0),
        180: (w, h),
        270: (0, w),
    }[placed.rotation]

    return Matrix44.chain(
        to_origin,
        rotate,
        Matrix44.translate(reanchor[0], reanchor[1], 0),
        Matrix44.translate(placed.x, placed.y, 0),
    )


def _add_primitive(msp, primitive: Primitive, layer: str):
    attribs = {'layer': layer}

    if isinstance(primitive, Line):
        return msp.add_line(primitive.start, primitive.end, dxfattribs=attribs)
    if isinstance(primitive, Polyline):
        return msp.add_lwpolyline(
            primitive.vertices,
            close=primitive.closed,
            dxfattribs=attribs
        )
    if isinstance(primitive, Circle):
        return msp.add_circle(primitive.center, primitive.radius, dxfattribs=attribs)
    if isinstance(primitive, Arc):
        return msp.add_arc(primitive.center, primitive.radius,
                           primitive.start_angle, primitive.end_angle,
                           dxfattribs=attribs)
    if isinstance(primitive, Spline):
        points = list(primitive.control_points)
        if len(points) < 2:
            return None
        return msp.add_open_spline(points, degree=min(3, len(points) - 1), dxfattribs=attribs)
    if isinstance(primitive, Ellipse):
        return msp.add_ellipse(primitive.center, primitive.major_axis,
                               primitive.ratio, dxfattribs=attribs)
    return None


def layout_to_document(result: NestingResult):
    """
    Build an ezdxf document for one layout.

    Args:
        result: Nesting layout

    Returns:
        ezdxf Drawing
    """
    doc = ezdxf.new()
    for name, color in LAYER_COLORS.items():
        doc.layers.add(name, color=color)

    msp = doc.modelspace()

    msp.add_lwpolyline([
        (0, 0),
        (result.sheet_width, 0),
        (result.sheet_width, result.sheet_height),
        (0, result.sheet_height)
    ], close=True, dxfattribs={'layer': 'SHEET'})

    for placed in result.placed_groups:
        msp.add_lwpolyline([
            (placed.x, placed.y),
            (placed.right, placed.y),
            (placed.right, placed.bottom),
            (placed.x, placed.bottom)
        ], close=True, dxfattribs={'layer': 'FOOTPRINT'})

        matrix = placement_matrix(placed)
        members = [(placed.group.parent, 'CUT')] + [(c, 'HOLES') for c in placed.group.children]

        for contour, layer in members:
            entity = _add_primitive(msp, contour.primitive, layer)
            if entity is not None:
                entity.transform(matrix)

    return doc


def layout_to_dxf_text(result: NestingResult) -> str:
    """Layout as DXF text"""
    stream = io.StringIO()
    layout_to_document(result).write(stream)
    return stream.getvalue()


def export_layout(result: NestingResult, filepath: str) -> str:
    """
    Save one layout as a DXF file.

    Raises:
        ExportError: the file could not be written
    """
    doc = layout_to_document(result)
    try:
        doc.saveas(filepath)
    except OSError as e:
        raise ExportError(str(filepath), str(e))

    logger.info(f"Saved: {filepath}")
    return str(filepath)


def export_layouts(results: List[NestingResult], base_filepath: str) -> List[str]:
    """Save every layout, numbered after the base name"""
    saved_files = []
    base, ext = os.path.splitext(base_filepath)
    ext = ext or '.dxf'

    for i, result in enumerate(results):
        if len(results) == 1:
            filepath = f"{base}{ext}"
        else:
            filepath = f"{base}_{i + 1}_{result.strategy or 'layout'}{ext}"
        saved_files.append(export_layout(result, filepath))

    return saved_files
