#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
SheetNest Core Module
=====================
Shared components: exceptions, event bus, DXF primitives and grouping.
"""

# Exceptions
from sheetnest.core.exceptions import (
    SheetNestError,
    ConfigurationError,
    ValidationError,
    InvalidFieldValueError,
    InvalidThicknessError,
    InvalidRotationError,
    DrawingError,
    DrawingTooLargeError,
    ExportError,
)

# Events
from sheetnest.core.events import (
    EventType,
    Event,
    EventBus,
    EventHandler,
    EventRecorder,
    setup_event_logging,
)


__all__ = [
    # Exceptions
    'SheetNestError',
    'ConfigurationError',
    'ValidationError',
    'InvalidFieldValueError',
    'InvalidThicknessError',
    'InvalidRotationError',
    'DrawingError',
    'DrawingTooLargeError',
    'ExportError',

    # Events
    'EventType',
    'Event',
    'EventBus',
    'EventHandler',
    'EventRecorder',
    'setup_event_logging',
]
