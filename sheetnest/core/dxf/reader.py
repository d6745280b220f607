"""
Drawing Reader - DXF text to primitives
=======================================
Parses drawing text with ezdxf and converts modelspace entities into
typed primitives for the grouper.
"""

import io
import logging
from pathlib import Path
from typing import Iterable, List, Optional

import ezdxf

from .entities import Primitive
from .converters import convert_entity
from .layer_filters import is_ignored_layer
from ..events import EventBus, EventType, emit

logger = logging.getLogger(__name__)

SOURCE = "reader"


class DrawingReader:
    """
    DXF drawing reader.

    Handles:
    - LINE, ARC, CIRCLE, LWPOLYLINE, POLYLINE, SPLINE, ELLIPSE
    - Optional skipping of dimension/text/frame layers (off by default,
      every layer is read)
    - Unreadable input: logged and returned as an empty entity list
    """

    def __init__(
        self,
        filter_layers: bool = False,
        extra_ignored_layers: Optional[Iterable[str]] = None
    ):
        """
        Args:
            filter_layers: Skip the known annotation layers (IGNORE_LAYERS)
            extra_ignored_layers: Layer names to skip, applied always
        """
        self.filter_layers = filter_layers
        self.extra_ignored_layers = list(extra_ignored_layers or [])

    def read_text(
        self,
        drawing_text: str,
        observer: Optional[EventBus] = None
    ) -> List[Primitive]:
        """
        Parse drawing text.

        Args:
            drawing_text: Full DXF file content
            observer: Optional event bus

        Returns:
            List of primitives, empty for empty or unparseable text
        """
        if not drawing_text or not drawing_text.strip():
            logger.warning("Empty drawing")
            emit(observer, EventType.DRAWING_UNREADABLE, SOURCE, reason="empty")
            return []

        try:
            doc = ezdxf.read(io.StringIO(drawing_text))
        except Exception as e:
            logger.warning(f"Cannot parse drawing: {e}")
            emit(observer, EventType.DRAWING_UNREADABLE, SOURCE, reason=str(e))
            return []

        primitives = self._collect(doc.modelspace())

        logger.debug(f"Parsed drawing: {len(primitives)} entities")
        emit(observer, EventType.DRAWING_PARSED, SOURCE, entities=len(primitives))

        return primitives

    def read_file(
        self,
        filepath: str,
        observer: Optional[EventBus] = None
    ) -> List[Primitive]:
        """
        Read a DXF file from disk.

        Args:
            filepath: Path to the DXF file

        Returns:
            List of primitives, empty when the file is missing or unreadable
        """
        path = Path(filepath)
        if not path.exists():
            logger.error(f"File not found: {filepath}")
            return []

        text = path.read_text(encoding="utf-8", errors="replace")
        return self.read_text(text, observer)

    def _collect(self, msp) -> List[Primitive]:
        """Convert modelspace entities, skipping ignored layers"""
        primitives: List[Primitive] = []

        extra = set(name.upper() for name in self.extra_ignored_layers)

        for entity in msp:
            layer = entity.dxf.get('layer', '0')

            if self.filter_layers and is_ignored_layer(layer):
                continue
            if layer.upper() in extra:
                continue

            primitive = convert_entity(entity)
            if primitive is not None:
                primitives.append(primitive)

        return primitives


def read_drawing(drawing_text: str, observer: Optional[EventBus] = None) -> List[Primitive]:
    """
    Parse drawing text with default reader settings.

    Args:
        drawing_text: Full DXF file content
        observer: Optional event bus

    Returns:
        List of primitives
    """
    return DrawingReader().read_text(drawing_text, observer)


__all__ = [
    'DrawingReader',
    'read_drawing',
]
