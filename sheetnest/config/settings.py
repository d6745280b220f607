#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
SheetNest configuration
Nesting parameters for laser/plasma sheet-metal cutting

Values can be overridden with environment variables or a .env file.
"""

import os
from typing import Dict, List, Tuple

from dotenv import load_dotenv

from sheetnest.core.exceptions import ConfigurationError

# Load environment variables from .env
load_dotenv()

# ============================================================
# NESTING - SPACING AND COST
# ============================================================

# Minimum clearance between parts and from the sheet edge (mm)
MIN_SPACING_MM = float(os.getenv("SHEETNEST_MIN_SPACING_MM", "10"))

# Metal cost per square metre of realised sheet
METAL_COST_PER_M2 = float(os.getenv("SHEETNEST_METAL_COST_PER_M2", "100"))

# Endpoint distance under which an open polyline/spline counts as closed (mm)
CONTOUR_TOLERANCE_MM = float(os.getenv("SHEETNEST_CONTOUR_TOLERANCE_MM", "1.0"))

# Number of layouts returned to the caller
MAX_RESULTS = int(os.getenv("SHEETNEST_MAX_RESULTS", "3"))

# Upper bound on the number of groups in one nesting request
MAX_GROUPS = int(os.getenv("SHEETNEST_MAX_GROUPS", "2000"))

# Rotations tried by the placement search (degrees)
DEFAULT_ROTATIONS: Tuple[int, ...] = (0, 90)

# ============================================================
# STOCK SHEETS
# ============================================================

# Thickness above which the larger stock sheet is used (exclusive, mm)
THICKNESS_THRESHOLD_MM = float(os.getenv("SHEETNEST_THICKNESS_THRESHOLD_MM", "3.1"))

# (width, height) in mm
SMALL_STOCK_SHEET: Tuple[float, float] = (1250.0, 2500.0)
LARGE_STOCK_SHEET: Tuple[float, float] = (1500.0, 3000.0)

# ============================================================
# MATERIALS
# ============================================================

MATERIALS: Dict[str, Dict] = {
    "steel": {
        "name": "Mild steel",
        "thicknesses": [0.5, 0.8, 1.0, 1.2, 1.5, 2.0, 3.0, 4.0, 5.0, 6.0,
                        8.0, 10.0, 12.0, 20.0, 25.0],
    },
    "stainless": {
        "name": "Stainless steel",
        "thicknesses": [0.5, 0.8, 1.0, 1.2, 1.5, 2.0, 3.0, 4.0, 5.0],
    },
    "aluminum": {
        "name": "Aluminium",
        "thicknesses": [0.5, 1.0, 1.5, 2.0, 3.0, 4.0, 5.0, 6.0],
    },
    "copper": {
        "name": "Copper / brass",
        "thicknesses": [0.5, 1.0, 1.5, 2.0, 3.0],
    },
}


def get_material_thicknesses(material: str) -> List[float]:
    """
    Return the available thicknesses for a material.

    Args:
        material: Material key (steel, stainless, aluminum, copper)

    Returns:
        List of thicknesses in mm, empty for unknown materials
    """
    info = MATERIALS.get(material.lower()) if material else None
    if not info:
        return []
    return list(info["thicknesses"])


# ============================================================
# LOGGING
# ============================================================

LOG_LEVEL = os.getenv("SHEETNEST_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


# ============================================================
# CONFIGURATION CHECK
# ============================================================

def validate_config():
    """
    Check that the configuration is usable.
    Call on application start.
    """
    errors = []

    if MIN_SPACING_MM < 0:
        errors.append("SHEETNEST_MIN_SPACING_MM must not be negative")

    if METAL_COST_PER_M2 < 0:
        errors.append("SHEETNEST_METAL_COST_PER_M2 must not be negative")

    if CONTOUR_TOLERANCE_MM < 0:
        errors.append("SHEETNEST_CONTOUR_TOLERANCE_MM must not be negative")

    if MAX_RESULTS < 1:
        errors.append("SHEETNEST_MAX_RESULTS must be at least 1")

    if MAX_GROUPS < 1:
        errors.append("SHEETNEST_MAX_GROUPS must be at least 1")

    if errors:
        raise ConfigurationError(
            f"Configuration errors: {', '.join(errors)}",
            details={"errors": errors}
        )

    return True


if __name__ == "__main__":
    print("=" * 60)
    print("SHEETNEST CONFIGURATION")
    print("=" * 60)
    print(f"Min spacing: {MIN_SPACING_MM} mm")
    print(f"Metal cost: {METAL_COST_PER_M2} per m²")
    print(f"Contour tolerance: {CONTOUR_TOLERANCE_MM} mm")
    print(f"Stock sheets: {SMALL_STOCK_SHEET} / {LARGE_STOCK_SHEET} "
          f"(threshold > {THICKNESS_THRESHOLD_MM} mm)")
    print()

    try:
        validate_config()
        print("[OK] Configuration valid")
    except ConfigurationError as e:
        print(f"[FAIL] {e}")
