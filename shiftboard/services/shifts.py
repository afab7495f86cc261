"""Service orchestrating shift CRUD and overlap validation."""

from __future__ import annotations

import logging

from shiftboard.domain.errors import OverlapConflictError, ShiftNotFoundError
from shiftboard.domain.models import (
    CheckOverlapRequest,
    CheckOverlapResponse,
    PriceRange,
    ShiftDateEntry,
    ShiftPayload,
    ShiftType,
    ShiftWithDates,
)
from shiftboard.repos.memory import ShiftRepository
from shiftboard.services.overlap import find_overlaps, has_overlap

logger = logging.getLogger(__name__)


class ShiftService:
    """Reads and writes shifts through a ShiftRepository.

    Create and update run their overlap checks and writes inside one
    repository transaction: either every date is stored or none is.

    With ``check_batch_overlaps`` enabled, the dates of a single submission
    are also checked against each other; by default each date is only
    checked against what is already stored.
    """

    def __init__(self, repo: ShiftRepository, check_batch_overlaps: bool = False) -> None:
        self.repo = repo
        self.check_batch_overlaps = check_batch_overlaps

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_shifts(self) -> list[ShiftWithDates]:
        return self.repo.list_all()

    def get_shift(self, shift_id: int) -> ShiftWithDates:
        shift = self.repo.get(shift_id)
        if shift is None:
            raise ShiftNotFoundError(shift_id)
        return shift

    def filter_by_price(self, min_price: float, max_price: float) -> list[ShiftWithDates]:
        return self.repo.list_by_price_range(min_price, max_price)

    def filter_by_type(self, shift_type: ShiftType) -> list[ShiftWithDates]:
        return self.repo.list_by_type(shift_type)

    def price_range(self) -> PriceRange:
        return self.repo.price_range()

    def check_overlap(self, request: CheckOverlapRequest) -> CheckOverlapResponse:
        entries = self.repo.list_entries(request.date, request.type)
        overlap = has_overlap(
            request.date,
            request.start_time,
            request.end_time,
            request.type,
            entries,
            request.exclude_shift_id,
        )
        return CheckOverlapResponse(has_overlap=overlap)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def create_shift(self, payload: ShiftPayload) -> ShiftWithDates:
        with self.repo.transaction():
            self._ensure_no_overlaps(payload)
            created = self.repo.add(payload.shift, payload.dates)

        logger.info(
            "Created shift %s (%s) with %d date(s)",
            created.id,
            created.type,
            len(created.dates),
        )
        return created

    def update_shift(self, shift_id: int, payload: ShiftPayload) -> ShiftWithDates:
        with self.repo.transaction():
            if not self.repo.exists(shift_id):
                raise ShiftNotFoundError(shift_id)
            self._ensure_no_overlaps(payload, exclude_shift_id=shift_id)
            updated = self.repo.replace(shift_id, payload.shift, payload.dates)

        logger.info("Updated shift %s, now %d date(s)", shift_id, len(updated.dates))
        return updated

    def delete_shift(self, shift_id: int) -> None:
        with self.repo.transaction():
            if not self.repo.delete(shift_id):
                raise ShiftNotFoundError(shift_id)
        logger.info("Deleted shift %s", shift_id)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _ensure_no_overlaps(
        self, payload: ShiftPayload, exclude_shift_id: int | None = None
    ) -> None:
        """Raise OverlapConflictError on the first date that overlaps."""
        shift_type = payload.shift.type
        accepted: list[ShiftDateEntry] = []

        for candidate in payload.dates:
            stored = self.repo.list_entries(candidate.date, shift_type)
            conflicts = find_overlaps(
                candidate.date,
                candidate.start_time,
                candidate.end_time,
                shift_type,
                stored,
                exclude_shift_id,
            )
            if conflicts:
                logger.warning(
                    "Rejected %s %s-%s (%s): overlaps shift(s) %s",
                    candidate.date,
                    candidate.start_time,
                    candidate.end_time,
                    shift_type,
                    sorted({c.shift_id for c in conflicts}),
                )
                raise OverlapConflictError(candidate.date, shift_type)

            if self.check_batch_overlaps:
                if has_overlap(
                    candidate.date,
                    candidate.start_time,
                    candidate.end_time,
                    shift_type,
                    accepted,
                ):
                    logger.warning(
                        "Rejected %s %s-%s (%s): overlaps another date in the same request",
                        candidate.date,
                        candidate.start_time,
                        candidate.end_time,
                        shift_type,
                    )
                    raise OverlapConflictError(candidate.date, shift_type)
                accepted.append(
                    ShiftDateEntry(
                        date=candidate.date,
                        start_time=candidate.start_time,
                        end_time=candidate.end_time,
                        type=shift_type,
                    )
                )
