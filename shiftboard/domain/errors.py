"""Errors raised by the shift service and repository."""

from __future__ import annotations


class ShiftError(Exception):
    """Base class for shift domain errors."""


class OverlapConflictError(ShiftError):
    """A date entry overlaps an existing entry of the same type on the same date."""

    def __init__(self, date: str, shift_type: str) -> None:
        self.date = date
        self.shift_type = shift_type
        super().__init__(
            f"Overlapping shift exists for date {date} with type {shift_type}"
        )


class ShiftNotFoundError(ShiftError):
    def __init__(self, shift_id: int) -> None:
        self.shift_id = shift_id
        super().__init__(f"Shift with ID {shift_id} not found")


class StorageError(ShiftError):
    """The underlying store failed; the surrounding transaction was rolled back."""
