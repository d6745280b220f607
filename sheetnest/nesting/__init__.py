"""
SheetNest Nesting Module
========================
Bounding-box nesting of grouped parts on a single stock sheet.

Main entry point: calculate_nesting(drawing_text, thickness)
- three sort strategies (width, height, area), one pass each
- best-position placement search with 0°/90° rotation
- sheet area, efficiency and metal cost per layout
"""

from .models import (
    StockSheet,
    NestingParams,
    PlacedGroup,
    NestingResult,
)

from .geometry import (
    ALLOWED_ROTATIONS,
    group_bounding_box,
    rotated_bounding_box,
)

from .collision import groups_collide

from .placement import find_best_placement

from .packer import pack_groups

from .nester import (
    STRATEGIES,
    select_stock_sheet,
    nest_groups,
    calculate_nesting,
)

__all__ = [
    'StockSheet',
    'NestingParams',
    'PlacedGroup',
    'NestingResult',
    'ALLOWED_ROTATIONS',
    'group_bounding_box',
    'rotated_bounding_box',
    'groups_collide',
    'find_best_placement',
    'pack_groups',
    'STRATEGIES',
    'select_stock_sheet',
    'nest_groups',
    'calculate_nesting',
]
