"""
Shared fixtures for the SheetNest tests.
"""

import io
import sys
import os

import pytest
import ezdxf

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sheetnest.core.dxf.entities import Polyline, Circle, Contour, EntityGroup
from sheetnest.core.dxf.bounds import entity_bounding_box
from sheetnest.nesting.models import StockSheet, NestingParams


def rect(x: float, y: float, w: float, h: float, closed: bool = True) -> Polyline:
    """Rectangular polyline with its lower-left corner at (x, y)"""
    return Polyline(
        vertices=((x, y), (x + w, y), (x + w, y + h), (x, y + h)),
        closed=closed,
    )


def contour(primitive) -> Contour:
    return Contour(primitive=primitive, bounding_box=entity_bounding_box(primitive))


def make_group(w: float, h: float, x: float = 0.0, y: float = 0.0, holes=()) -> EntityGroup:
    """Rectangular part with optional circular holes given as (cx, cy, r)"""
    children = [contour(Circle(center=(cx, cy), radius=r)) for cx, cy, r in holes]
    return EntityGroup(parent=contour(rect(x, y, w, h)), children=children)


def dxf_text(build) -> str:
    """Create an in-memory DXF drawing and return its text"""
    doc = ezdxf.new()
    build(doc.modelspace())
    stream = io.StringIO()
    doc.write(stream)
    return stream.getvalue()


@pytest.fixture
def small_sheet() -> StockSheet:
    return StockSheet(1250.0, 2500.0)


@pytest.fixture
def params() -> NestingParams:
    return NestingParams(spacing=10.0, cost_per_m2=100.0, rotations=[0, 90],
                         contour_tolerance=1.0, max_results=3, max_groups=2000)


@pytest.fixture
def two_rectangles_dxf() -> str:
    def build(msp):
        msp.add_lwpolyline([(0, 0), (500, 0), (500, 300), (0, 300)], close=True)
        msp.add_lwpolyline([(1000, 0), (1500, 0), (1500, 300), (1000, 300)], close=True)
    return dxf_text(build)


@pytest.fixture
def plate_with_hole_dxf() -> str:
    def build(msp):
        msp.add_lwpolyline([(0, 0), (100, 0), (100, 100), (0, 100)], close=True)
        msp.add_circle((50, 50), 10)
    return dxf_text(build)
