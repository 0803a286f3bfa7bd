"""Errors raised by the pay-period calculator."""

from __future__ import annotations

from typing import Any, Optional


class PayrollScheduleError(ValueError):
    """Base class for schedule/calendar input errors."""

    def __init__(self, message: str, context: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} ({context_str})"
        return self.message


class InvalidDateError(PayrollScheduleError):
    """A date input could not be parsed into a calendar date."""

    def __init__(self, message: str, value: Any = None, context: Optional[dict[str, Any]] = None):
        super().__init__(message, context)
        self.value = value


class InvalidArgumentError(PayrollScheduleError):
    """A non-date argument is out of range or of the wrong type."""

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        value: Any = None,
        context: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, context)
        self.field = field
        self.value = value
