"""Exceptions raised by the recall engine."""

from __future__ import annotations

from typing import Any


class RecallError(Exception):
    """Base class for engine errors."""


class ValidationError(RecallError, ValueError):
    """
    Raised when an engine input is outside its documented domain.

    Attributes:
        field: Name of the offending argument.
        value: The rejected value.
    """

    def __init__(self, message: str, field: str | None = None, value: Any = None):
        super().__init__(message)
        self.field = field
        self.value = value
