"""
SheetNest
=========
Sheet-metal nesting for laser/plasma cutting quotes.

Usage:
    from sheetnest import calculate_nesting

    results = calculate_nesting(dxf_text, thickness=2.0)
    for result in results:
        print(f"{result.strategy}: {result.efficiency:.1f}% "
              f"{result.sheet_width:.0f}x{result.sheet_height:.0f}mm")
"""

__version__ = "1.0.0"

from sheetnest.nesting import (
    NestingParams,
    NestingResult,
    PlacedGroup,
    calculate_nesting,
    nest_groups,
    select_stock_sheet,
)

__all__ = [
    'NestingParams',
    'NestingResult',
    'PlacedGroup',
    'calculate_nesting',
    'nest_groups',
    'select_stock_sheet',
]
