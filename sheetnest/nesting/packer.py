"""
Packer - places an ordered sequence of groups on one sheet.

Sheet metrics:
1. Realised sheet = smallest rectangle covering every footprint plus the
   spacing, capped by the stock sheet
2. Used area = sum of unrotated group boxes
3. Efficiency = used / sheet area in percent
4. Metal cost = sheet area × cost per m²
"""

import logging
from typing import List, Optional, Sequence

from sheetnest.core.dxf.entities import EntityGroup
from sheetnest.core.events import EventBus, EventType, emit
from .models import NestingParams, NestingResult, PlacedGroup, StockSheet, MM2_PER_M2
from .placement import CandidateTracker, find_best_placement

logger = logging.getLogger(__name__)

SOURCE = "packer"


def pack_groups(
    groups: Sequence[EntityGroup],
    sheet: StockSheet,
    params: Optional[NestingParams] = None,
    strategy: str = "",
    observer: Optional[EventBus] = None
) -> NestingResult:
    """
    Pack groups in the given order.

    Groups that fit nowhere are left out of this layout and listed in
    `unplaced_groups`.

    Args:
        groups: Groups in placement order
        sheet: Stock sheet bounds
        params: Spacing, rotations and cost
        strategy: Name stored on the result
        observer: Optional event bus

    Returns:
        NestingResult; metrics stay zero when nothing was placed
    """
    params = params or NestingParams()

    placed: List[PlacedGroup] = []
    tracker = CandidateTracker(params.spacing)
    unplaced: List[EntityGroup] = []

    for index, group in enumerate(groups):
        placement = find_best_placement(group, placed, sheet, params.rotations,
                                        params.spacing, tracker.positions)

        if placement is None:
            unplaced.append(group)
            emit(observer, EventType.GROUP_OMITTED, SOURCE,
                 strategy=strategy, index=index)
            continue

        placed.append(placement)
        tracker.add(placement)
        emit(observer, EventType.GROUP_PLACED, SOURCE,
             strategy=strategy, index=index,
             x=placement.x, y=placement.y, rotation=placement.rotation)

    result = NestingResult(
        placed_groups=placed,
        strategy=strategy,
        stock_sheet=sheet,
        unplaced_groups=unplaced,
    )

    if not placed:
        logger.debug(f"[{strategy}] Nothing placed ({len(unplaced)} omitted)")
        return result

    _calculate_metrics(result, sheet, params)

    logger.debug(
        f"[{strategy}] {len(placed)} placed, {len(unplaced)} omitted | "
        f"{result.sheet_width:.0f}x{result.sheet_height:.0f}mm | "
        f"{result.efficiency:.1f}%"
    )
    emit(observer, EventType.STRATEGY_COMPLETED, SOURCE,
         strategy=strategy, placed=len(placed), omitted=len(unplaced),
         efficiency=result.efficiency)

    return result


def _calculate_metrics(result: NestingResult, sheet: StockSheet,
                       params: NestingParams) -> None:
    """Fill sheet size, areas, efficiency and cost"""
    max_used_x = max(p.right for p in result.placed_groups)
    max_used_y = max(p.bottom for p in result.placed_groups)

    result.sheet_width = min(max_used_x + params.spacing, sheet.max_width)
    result.sheet_height = min(max_used_y + params.spacing, sheet.max_height)

    result.sheet_area_m2 = result.sheet_width * result.sheet_height / MM2_PER_M2
    result.used_area_m2 = sum(p.bounding_box.area for p in result.placed_groups) / MM2_PER_M2

    if result.sheet_area_m2 > 0:
        result.efficiency = result.used_area_m2 / result.sheet_area_m2 * 100
    else:
        result.efficiency = 0.0

    result.metal_cost = result.sheet_area_m2 * params.cost_per_m2
