"""
Placement search - best position for a single group.

Candidate anchors are the sheet origin (inset by the spacing) and, for
every placed group, the point right of it and the point below it. The
candidate with the lowest score y * 10 + x wins, so lower rows are filled
before new columns are opened.

Candidates are visited in score order, so each rotation stops at its first
free anchor. Equal scores keep discovery order and equal results keep the
earlier rotation.
"""

import logging
from typing import List, Optional, Sequence, Tuple

from sheetnest.core.dxf.entities import EntityGroup
from .collision import rectangles_collide, collides_with_any
from .geometry import group_bounding_box, rotated_bounding_box
from .models import PlacedGroup, StockSheet

logger = logging.getLogger(__name__)

ROW_WEIGHT = 10

Position = Tuple[float, float]


def placement_score(x: float, y: float) -> float:
    """Lower is better"""
    return y * ROW_WEIGHT + x


def _anchors_of(p: PlacedGroup, spacing: float) -> Tuple[Position, Position]:
    return (p.right + spacing, p.y), (p.x, p.bottom + spacing)


def candidate_positions(placed: Sequence[PlacedGroup], spacing: float) -> List[Position]:
    """
    Candidate anchors in discovery order, without repeats.

    Args:
        placed: Groups already on the sheet
        spacing: Minimum clearance (mm)

    Returns:
        List of (x, y)
    """
    positions = [(spacing, spacing)]
    seen = {positions[0]}

    for p in placed:
        for position in _anchors_of(p, spacing):
            if position not in seen:
                seen.add(position)
                positions.append(position)

    return positions


def _point_blocked(x: float, y: float, p: PlacedGroup, spacing: float) -> bool:
    # A zero-size footprint that collides means every footprint collides
    return rectangles_collide(p.x, p.y, p.width, p.height, x, y, 0.0, 0.0, spacing)


class CandidateTracker:
    """
    Candidate anchors of one packing pass, updated as groups are placed.

    Holds the same anchors as candidate_positions() in the same order,
    minus those already blocked for any footprint size. Those could never
    be chosen, so dropping them does not change any placement.
    """

    def __init__(self, spacing: float):
        self.spacing = spacing
        self.placed: List[PlacedGroup] = []
        self.positions: List[Position] = [(spacing, spacing)]
        self._seen = {self.positions[0]}

    def add(self, placement: PlacedGroup) -> None:
        """Record a placed group: drop anchors it blocks, add its own"""
        spacing = self.spacing
        self.positions = [
            (x, y) for x, y in self.positions
            if not _point_blocked(x, y, placement, spacing)
        ]
        self.placed.append(placement)

        for position in _anchors_of(placement, spacing):
            if position in self._seen:
                continue
            self._seen.add(position)
            x, y = position
            if not any(_point_blocked(x, y, p, spacing) for p in self.placed):
                self.positions.append(position)


def fits_on_sheet(x: float, y: float, width: float, height: float,
                  sheet: StockSheet, spacing: float) -> bool:
    """Footprint plus trailing spacing stays within the stock sheet"""
    return (x + width + spacing <= sheet.max_width and
            y + height + spacing <= sheet.max_height)


def find_best_placement(
    group: EntityGroup,
    placed: Sequence[PlacedGroup],
    sheet: StockSheet,
    rotations: Sequence[int],
    spacing: float,
    positions: Optional[Sequence[Position]] = None
) -> Optional[PlacedGroup]:
    """
    Find the best free position for a group.

    Args:
        group: Group to place
        placed: Groups already on the sheet
        sheet: Stock sheet bounds
        rotations: Rotations to try, in preference order
        spacing: Minimum clearance (mm)
        positions: Candidate anchors (e.g. from a CandidateTracker);
            derived from `placed` when omitted

    Returns:
        PlacedGroup with the lowest score, or None if nothing fits
    """
    if positions is None:
        positions = candidate_positions(placed, spacing)
    ordered = sorted(positions, key=lambda pos: placement_score(*pos))

    bbox = group_bounding_box(group)
    best: Optional[Tuple[float, float, float, int]] = None

    for rotation in rotations:
        footprint = rotated_bounding_box(bbox, rotation)
        width, height = footprint.width, footprint.height

        for x, y in ordered:
            score = placement_score(x, y)
            if best is not None and score >= best[0]:
                break

            if not fits_on_sheet(x, y, width, height, sheet, spacing):
                continue
            if collides_with_any(x, y, width, height, placed, spacing):
                continue

            best = (score, x, y, rotation)
            break

    if best is None:
        return None

    _, x, y, rotation = best
    return PlacedGroup(group=group, x=x, y=y, rotation=rotation)
