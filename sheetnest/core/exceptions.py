"""
SheetNest - Exceptions
======================
Exception hierarchy for the whole package.
"""

from typing import List, Optional


class SheetNestError(Exception):
    """Base exception for all SheetNest errors"""

    def __init__(self, message: str, code: str = None, details: dict = None):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def __str__(self):
        if self.details:
            return f"[{self.code}] {self.message} | Details: {self.details}"
        return f"[{self.code}] {self.message}"


# ============================================================
# Configuration Errors
# ============================================================

class ConfigurationError(SheetNestError):
    """Invalid environment configuration"""
    pass


# ============================================================
# Validation Errors
# ============================================================

class ValidationError(SheetNestError):
    """Invalid input passed by the caller"""
    pass


class InvalidFieldValueError(ValidationError):
    """Invalid value of a parameter"""

    def __init__(self, field: str, value, reason: str = None):
        msg = f"Invalid value for field '{field}': {value}"
        if reason:
            msg += f" - {reason}"
        super().__init__(
            msg,
            code="INVALID_FIELD_VALUE",
            details={"field": field, "value": str(value), "reason": reason}
        )


class InvalidThicknessError(ValidationError):
    """Material thickness is not a positive number"""

    def __init__(self, thickness):
        super().__init__(
            f"Invalid material thickness: {thickness}. Must be a positive number of mm",
            code="INVALID_THICKNESS",
            details={"thickness": str(thickness)}
        )


class InvalidRotationError(ValidationError):
    """Rotation is not a multiple of 90 degrees"""

    def __init__(self, rotation, allowed: Optional[List[int]] = None):
        allowed = allowed or [0, 90, 180, 270]
        super().__init__(
            f"Invalid rotation: {rotation}. Allowed: {', '.join(str(a) for a in allowed)}",
            code="INVALID_ROTATION",
            details={"rotation": str(rotation), "allowed": allowed}
        )


# ============================================================
# Drawing Errors
# ============================================================

class DrawingError(SheetNestError):
    """Errors related to the input drawing"""
    pass


class DrawingTooLargeError(DrawingError):
    """Too many groups to nest in one request"""

    def __init__(self, group_count: int, max_groups: int):
        super().__init__(
            f"Drawing has {group_count} parts. Maximum: {max_groups}",
            code="DRAWING_TOO_LARGE",
            details={"group_count": group_count, "max_groups": max_groups}
        )


# ============================================================
# Export Errors
# ============================================================

class ExportError(SheetNestError):
    """Writing a layout to a file failed"""

    def __init__(self, path: str, reason: str = None):
        super().__init__(
            f"Failed to export layout: {path}" + (f" - {reason}" if reason else ""),
            code="EXPORT_ERROR",
            details={"path": path, "reason": reason}
        )
