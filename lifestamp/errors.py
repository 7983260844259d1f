# errors.py
"""
Shared error model for the lifestamp package.
Every failure raised by the board and the shape codec carries an ErrorKind
so callers can branch on it without string matching.
"""

from __future__ import annotations
from enum import Enum
from typing import Any, Dict, Optional


class ErrorKind(Enum):
    INVALID_DIMENSIONS = "InvalidDimensions"
    OUT_OF_BOUNDS = "OutOfBounds"
    DOES_NOT_FIT = "DoesNotFit"
    INVALID_STATE_CHAR = "InvalidStateChar"
    INVALID_REPETITION_COUNT = "InvalidRepetitionCount"
    WIDTH_MISMATCH = "WidthMismatch"
    HEIGHT_MISMATCH = "HeightMismatch"


class LifeError(Exception):
    """Base exception for board and shape codec failures."""
    kind: ErrorKind

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        self.message = message
        self.context = dict(context or {})
        super().__init__(message, self.context)

    def __str__(self) -> str:
        if self.context:
            details = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
            return f"{self.kind.value}: {self.message} ({details})"
        return f"{self.kind.value}: {self.message}"
