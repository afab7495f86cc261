"""Service for detecting overlapping shift date entries."""

from __future__ import annotations

from collections.abc import Iterable

from shiftboard.domain.models import ShiftDateEntry, ShiftType


def entry_overlaps(start_time: str, end_time: str, entry: ShiftDateEntry) -> bool:
    """Return True if ``start_time``-``end_time`` overlaps ``entry``.

    Times are ``hh:mm`` strings, so plain string comparison is chronological.
    An entry is hit when the candidate starts inside it, ends inside it, or
    fully contains it.  Exact boundary touches (end == start) are NOT
    considered overlaps.
    """
    return (
        (start_time >= entry.start_time and start_time < entry.end_time)
        or (end_time > entry.start_time and end_time <= entry.end_time)
        or (start_time <= entry.start_time and end_time >= entry.end_time)
    )


def find_overlaps(
    date: str,
    start_time: str,
    end_time: str,
    shift_type: ShiftType,
    existing_entries: Iterable[ShiftDateEntry],
    exclude_shift_id: int | None = None,
) -> list[ShiftDateEntry]:
    """Return the existing entries the candidate span overlaps.

    Only entries on the same date and of the same type are compared.  When
    ``exclude_shift_id`` is given, that shift's own entries are skipped so a
    shift never conflicts with its pre-update data.
    """
    return [
        entry
        for entry in existing_entries
        if entry.date == date
        and entry.type == shift_type
        and (exclude_shift_id is None or entry.shift_id != exclude_shift_id)
        and entry_overlaps(start_time, end_time, entry)
    ]


def has_overlap(
    date: str,
    start_time: str,
    end_time: str,
    shift_type: ShiftType,
    existing_entries: Iterable[ShiftDateEntry],
    exclude_shift_id: int | None = None,
) -> bool:
    return bool(
        find_overlaps(
            date, start_time, end_time, shift_type, existing_entries, exclude_shift_id
        )
    )
