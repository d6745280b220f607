"""
Nester - multi-strategy nesting of one drawing
==============================================
Runs the packer once per sort order and ranks the layouts by efficiency.

Strategies (all descending, stable):
- width-first
- height-first
- area-first

One deterministic pass per strategy; no shuffling or backtracking.
"""

import math
import time
import logging
from typing import Callable, List, Optional, Sequence, Tuple

from sheetnest.config import settings
from sheetnest.core.dxf.entities import EntityGroup
from sheetnest.core.dxf.grouping import group_entities
from sheetnest.core.dxf.reader import DrawingReader
from sheetnest.core.events import EventBus
from sheetnest.core.exceptions import DrawingTooLargeError, InvalidThicknessError
from .geometry import group_bounding_box
from .models import NestingParams, NestingResult, StockSheet
from .packer import pack_groups

logger = logging.getLogger(__name__)

SortKey = Callable[[EntityGroup], float]


def _width(group: EntityGroup) -> float:
    return group_bounding_box(group).width


def _height(group: EntityGroup) -> float:
    return group_bounding_box(group).height


def _area(group: EntityGroup) -> float:
    return group_bounding_box(group).area


STRATEGIES: List[Tuple[str, SortKey]] = [
    ("width-first", _width),
    ("height-first", _height),
    ("area-first", _area),
]


def select_stock_sheet(thickness: float) -> StockSheet:
    """
    Pick the stock sheet for a material thickness.

    Thickness strictly above the threshold (3.1 mm) selects the larger
    sheet.

    Raises:
        InvalidThicknessError: thickness is not a positive finite number
    """
    if isinstance(thickness, bool) or not isinstance(thickness, (int, float)):
        raise InvalidThicknessError(thickness)
    if not math.isfinite(thickness) or thickness <= 0:
        raise InvalidThicknessError(thickness)

    if thickness > settings.THICKNESS_THRESHOLD_MM:
        return StockSheet(*settings.LARGE_STOCK_SHEET)
    return StockSheet(*settings.SMALL_STOCK_SHEET)


def layout_signature(result: NestingResult) -> frozenset:
    """Placement identity of a layout, independent of placement order"""
    return frozenset(
        (id(p.group), p.x, p.y, p.rotation) for p in result.placed_groups
    )


def sort_groups(groups: Sequence[EntityGroup], key: SortKey) -> List[EntityGroup]:
    """Sort descending by key; equal keys keep input order"""
    return sorted(groups, key=key, reverse=True)


def nest_groups(
    groups: Sequence[EntityGroup],
    thickness: float,
    params: Optional[NestingParams] = None,
    observer: Optional[EventBus] = None
) -> List[NestingResult]:
    """
    Nest already-grouped parts.

    Args:
        groups: Parts to nest
        thickness: Material thickness (mm)
        params: Nesting parameters
        observer: Optional event bus

    Returns:
        Up to params.max_results layouts, best efficiency first. Strategies
        that place nothing contribute no layout.

    Raises:
        InvalidThicknessError: invalid thickness
        DrawingTooLargeError: more groups than params.max_groups
    """
    params = params or NestingParams()
    sheet = select_stock_sheet(thickness)

    if not groups:
        return []

    if params.max_groups is not None and len(groups) > params.max_groups:
        raise DrawingTooLargeError(len(groups), params.max_groups)

    start_time = time.time()
    results: List[NestingResult] = []
    seen_layouts = set()

    for name, key in STRATEGIES:
        ordered = sort_groups(groups, key)
        result = pack_groups(ordered, sheet, params, strategy=name, observer=observer)
        if not result.placed_groups:
            continue

        # Different sort orders often produce the same layout
        signature = layout_signature(result)
        if signature in seen_layouts:
            logger.debug(f"[{name}] Same layout as an earlier strategy")
            continue
        seen_layouts.add(signature)
        results.append(result)

    results.sort(key=lambda r: r.efficiency, reverse=True)
    results = results[:params.max_results]

    elapsed = time.time() - start_time
    if results:
        logger.info(
            f"Nesting: {len(groups)} groups on {sheet.max_width:.0f}x{sheet.max_height:.0f}mm | "
            f"best {results[0].strategy} {results[0].efficiency:.1f}% | {elapsed:.2f}s"
        )
    else:
        logger.info(f"Nesting: none of {len(groups)} groups fits the stock sheet")

    return results


def calculate_nesting(
    drawing_text: str,
    thickness: float,
    params: Optional[NestingParams] = None,
    observer: Optional[EventBus] = None,
    reader: Optional[DrawingReader] = None
) -> List[NestingResult]:
    """
    Nest all parts of a DXF drawing.

    Args:
        drawing_text: Full DXF file content
        thickness: Material thickness (mm)
        params: Nesting parameters
        observer: Optional event bus for diagnostics
        reader: Reader to use instead of the default one

    Returns:
        Up to 3 layouts, best efficiency first; empty for empty or
        unreadable drawings
    """
    params = params or NestingParams()
    sheet = select_stock_sheet(thickness)
    reader = reader or DrawingReader()

    primitives = reader.read_text(drawing_text, observer)
    groups = group_entities(primitives, params.contour_tolerance, observer)

    if not groups:
        logger.info("Nesting: no closed contours in drawing")
        return []

    logger.debug(f"Stock sheet for {thickness}mm: {sheet.max_width:.0f}x{sheet.max_height:.0f}mm")
    return nest_groups(groups, thickness, params, observer)


__all__ = [
    'STRATEGIES',
    'select_stock_sheet',
    'layout_signature',
    'sort_groups',
    'nest_groups',
    'calculate_nesting',
]
