"""In-memory repository for shifts and their dates."""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime, timezone

from shiftboard.domain.errors import ShiftError, StorageError
from shiftboard.domain.models import (
    PriceRange,
    Shift,
    ShiftDate,
    ShiftDateEntry,
    ShiftDateInput,
    ShiftInput,
    ShiftType,
    ShiftWithDates,
)

logger = logging.getLogger(__name__)


class ShiftRepository:
    """Dict-backed store for Shift and ShiftDate records, keyed by id.

    Every public method takes the store lock.  ``transaction()`` holds the
    same (re-entrant) lock for its whole body, so a check-then-write sequence
    run inside it cannot interleave with another request's writes.
    """

    def __init__(self) -> None:
        self._shifts: dict[int, Shift] = {}
        self._dates: dict[int, ShiftDate] = {}
        self._next_shift_id = 1
        self._next_date_id = 1
        self._lock = threading.RLock()

    @contextmanager
    def transaction(self) -> Iterator[None]:
        """Run the body atomically, restoring the previous state if it raises.

        Domain errors propagate as-is; anything else is re-raised as
        ``StorageError``.
        """
        with self._lock:
            snapshot = (
                dict(self._shifts),
                dict(self._dates),
                self._next_shift_id,
                self._next_date_id,
            )
            try:
                yield
            except ShiftError:
                self._restore(snapshot)
                raise
            except Exception as exc:
                self._restore(snapshot)
                logger.exception("Shift transaction failed, rolled back")
                raise StorageError("Shift storage failure") from exc

    def _restore(self, snapshot: tuple) -> None:
        shifts, dates, next_shift_id, next_date_id = snapshot
        self._shifts = shifts
        self._dates = dates
        self._next_shift_id = next_shift_id
        self._next_date_id = next_date_id

    # -- reads -------------------------------------------------------------

    def list_all(self) -> list[ShiftWithDates]:
        with self._lock:
            return [self._with_dates(s) for s in self._shifts.values()]

    def get(self, shift_id: int) -> ShiftWithDates | None:
        with self._lock:
            shift = self._shifts.get(shift_id)
            return self._with_dates(shift) if shift is not None else None

    def exists(self, shift_id: int) -> bool:
        with self._lock:
            return shift_id in self._shifts

    def list_by_price_range(self, min_price: float, max_price: float) -> list[ShiftWithDates]:
        with self._lock:
            return [
                self._with_dates(s)
                for s in self._shifts.values()
                if min_price <= s.price <= max_price
            ]

    def list_by_type(self, shift_type: ShiftType) -> list[ShiftWithDates]:
        with self._lock:
            return [self._with_dates(s) for s in self._shifts.values() if s.type == shift_type]

    def list_entries(self, date: str, shift_type: ShiftType) -> list[ShiftDateEntry]:
        """Return stored dates on ``date`` whose owning shift is of ``shift_type``."""
        with self._lock:
            entries: list[ShiftDateEntry] = []
            for d in self._dates.values():
                shift = self._shifts.get(d.shift_id)
                if shift is None or d.date != date or shift.type != shift_type:
                    continue
                entries.append(
                    ShiftDateEntry(
                        shift_id=d.shift_id,
                        date=d.date,
                        start_time=d.start_time,
                        end_time=d.end_time,
                        type=shift.type,
                    )
                )
            return entries

    def price_range(self) -> PriceRange:
        with self._lock:
            prices = [s.price for s in self._shifts.values()]
        if not prices:
            return PriceRange()
        return PriceRange(min=min(prices), max=max(prices))

    # -- writes ------------------------------------------------------------

    def add(self, shift: ShiftInput, dates: list[ShiftDateInput]) -> ShiftWithDates:
        with self._lock:
            stored = Shift(id=self._next_shift_id, **shift.model_dump())
            self._next_shift_id += 1
            self._shifts[stored.id] = stored
            self._insert_dates(stored.id, dates)
            return self._with_dates(stored)

    def replace(
        self, shift_id: int, shift: ShiftInput, dates: list[ShiftDateInput]
    ) -> ShiftWithDates | None:
        """Overwrite a shift's fields and swap its dates for ``dates``."""
        with self._lock:
            current = self._shifts.get(shift_id)
            if current is None:
                return None
            updated = current.model_copy(
                update={**shift.model_dump(), "updated_at": datetime.now(timezone.utc)}
            )
            self._shifts[shift_id] = updated
            self._delete_dates(shift_id)
            self._insert_dates(shift_id, dates)
            return self._with_dates(updated)

    def delete(self, shift_id: int) -> bool:
        """Remove a shift and its dates.  Returns False if it did not exist."""
        with self._lock:
            if self._shifts.pop(shift_id, None) is None:
                return False
            self._delete_dates(shift_id)
            return True

    # -- helpers -----------------------------------------------------------

    def _insert_dates(self, shift_id: int, dates: list[ShiftDateInput]) -> None:
        for d in dates:
            stored = ShiftDate(id=self._next_date_id, shift_id=shift_id, **d.model_dump())
            self._next_date_id += 1
            self._dates[stored.id] = stored

    def _delete_dates(self, shift_id: int) -> None:
        self._dates = {k: d for k, d in self._dates.items() if d.shift_id != shift_id}

    def _with_dates(self, shift: Shift) -> ShiftWithDates:
        dates = [d for d in self._dates.values() if d.shift_id == shift.id]
        return ShiftWithDates(**shift.model_dump(), dates=dates)


# ---------------------------------------------------------------------------
# Seed data – a few shifts useful for trying out filters and overlap checks
# ---------------------------------------------------------------------------


def _seed_shifts(repo: ShiftRepository) -> None:
    repo.add(
        ShiftInput(
            title="Morning consultations",
            description="General practice consultations",
            price=120,
            type=ShiftType.CONSULTATION,
        ),
        [
            ShiftDateInput(date="20-03-2024", start_time="09:00", end_time="12:00"),
            ShiftDateInput(date="21-03-2024", start_time="09:00", end_time="12:00"),
        ],
    )
    repo.add(
        ShiftInput(
            title="Evening phone line",
            price=80,
            type=ShiftType.TELEPHONE,
        ),
        [ShiftDateInput(date="20-03-2024", start_time="18:00", end_time="22:00")],
    )
    repo.add(
        ShiftInput(
            title="Night ambulance",
            description="Emergency response crew",
            price=250,
            type=ShiftType.AMBULANCE,
        ),
        [ShiftDateInput(date="22-03-2024", start_time="20:00", end_time="23:59")],
    )


def create_shift_repository(seed: bool = False) -> ShiftRepository:
    """Return a ShiftRepository, optionally pre-loaded with sample data."""
    repo = ShiftRepository()
    if seed:
        _seed_shifts(repo)
    return repo
