"""
DXF Layer Filters - Layers without cut geometry
===============================================
Optional filter: dimension, text and frame layers can be skipped before
grouping. Names are matched exactly (case-insensitive), so a layer such as
DIMPLED_PLATE or CENTER_PANEL is never mistaken for an annotation layer.
"""

from typing import Set

# Layers that are never cut
IGNORE_LAYERS: Set[str] = {
    # Dimensions and text
    "DIM", "DIMS", "DIMENSIONS", "TEXT", "NOTES", "DEFPOINTS",
    # Structure and hidden geometry
    "HIDDEN", "CENTER", "CENTERLINES", "GRID", "TITLE",
    "FRAME", "BORDER", "LOGO", "INFO",
    # Inventor helpers
    "IV_ARC_CENTERS",
    # Other CAD
    "0_NOTES", "ANNOTATIONS", "SYMBOLS",
}


def is_ignored_layer(layer_name: str) -> bool:
    """Check whether a layer is one of the known annotation layers"""
    if not layer_name:
        return False
    return layer_name.upper() in IGNORE_LAYERS


__all__ = [
    'IGNORE_LAYERS',
    'is_ignored_layer',
]
