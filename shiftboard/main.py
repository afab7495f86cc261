"""FastAPI application: entry point for the shift scheduling service."""

from __future__ import annotations

import logging

import uvicorn
from fastapi import APIRouter, Depends, FastAPI, HTTPException, Request

from shiftboard.core.config import Settings
from shiftboard.core.logging_config import setup_logging
from shiftboard.domain.errors import (
    OverlapConflictError,
    ShiftNotFoundError,
    StorageError,
)
from shiftboard.domain.models import (
    CheckOverlapRequest,
    CheckOverlapResponse,
    MessageResponse,
    PriceFilterRequest,
    PriceRange,
    ShiftPayload,
    ShiftWithDates,
    TypeFilterRequest,
)
from shiftboard.repos.memory import ShiftRepository, create_shift_repository
from shiftboard.services.shifts import ShiftService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/shifts", tags=["shifts"])


def get_shift_service(request: Request) -> ShiftService:
    """FastAPI dependency: the ShiftService built by ``create_app``."""
    return request.app.state.shift_service


# ── Routes ────────────────────────────────────────────────────────────


@router.get("", response_model=list[ShiftWithDates])
def list_shifts(service: ShiftService = Depends(get_shift_service)) -> list[ShiftWithDates]:
    """Return all shifts with their dates."""
    return service.list_shifts()


@router.get("/price-range", response_model=PriceRange)
def get_price_range(service: ShiftService = Depends(get_shift_service)) -> PriceRange:
    """Return the lowest and highest shift price."""
    return service.price_range()


@router.get("/{shift_id}", response_model=ShiftWithDates)
def get_shift(
    shift_id: int, service: ShiftService = Depends(get_shift_service)
) -> ShiftWithDates:
    try:
        return service.get_shift(shift_id)
    except ShiftNotFoundError:
        raise HTTPException(status_code=404, detail="Shift not found")


@router.post("/filter/price", response_model=list[ShiftWithDates])
def filter_by_price(
    body: PriceFilterRequest, service: ShiftService = Depends(get_shift_service)
) -> list[ShiftWithDates]:
    return service.filter_by_price(body.min_price, body.max_price)


@router.post("/filter/type", response_model=list[ShiftWithDates])
def filter_by_type(
    body: TypeFilterRequest, service: ShiftService = Depends(get_shift_service)
) -> list[ShiftWithDates]:
    return service.filter_by_type(body.type)


@router.post("/check-overlap", response_model=CheckOverlapResponse)
def check_overlap(
    body: CheckOverlapRequest, service: ShiftService = Depends(get_shift_service)
) -> CheckOverlapResponse:
    """Report whether a single date/time/type would overlap a stored shift."""
    return service.check_overlap(body)


@router.post("", response_model=ShiftWithDates, status_code=201)
def create_shift(
    payload: ShiftPayload, service: ShiftService = Depends(get_shift_service)
) -> ShiftWithDates:
    """Create a shift together with all of its dates."""
    try:
        return service.create_shift(payload)
    except OverlapConflictError as exc:
        raise HTTPException(status_code=409, detail=str(exc))
    except StorageError:
        raise HTTPException(status_code=500, detail="Failed to create shift")


@router.put("/{shift_id}", response_model=ShiftWithDates)
def update_shift(
    shift_id: int,
    payload: ShiftPayload,
    service: ShiftService = Depends(get_shift_service),
) -> ShiftWithDates:
    """Replace a shift's fields and its full set of dates."""
    try:
        return service.update_shift(shift_id, payload)
    except ShiftNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    except OverlapConflictError as exc:
        raise HTTPException(status_code=409, detail=str(exc))
    except StorageError:
        raise HTTPException(status_code=500, detail="Failed to update shift")


@router.delete("/{shift_id}", response_model=MessageResponse)
def delete_shift(
    shift_id: int, service: ShiftService = Depends(get_shift_service)
) -> MessageResponse:
    try:
        service.delete_shift(shift_id)
    except ShiftNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    except StorageError:
        raise HTTPException(status_code=500, detail="Failed to delete shift")
    return MessageResponse(message="Shift deleted successfully")


# ── Application factory ───────────────────────────────────────────────


def create_app(
    settings: Settings | None = None, repo: ShiftRepository | None = None
) -> FastAPI:
    """Build the app with its own repository and service.

    Serve with ``uvicorn --factory shiftboard.main:create_app`` or the
    ``shiftboard`` console script.
    """
    settings = settings or Settings()
    setup_logging(settings.log_level)

    if repo is None:
        repo = create_shift_repository(seed=settings.seed_demo_data)

    app = FastAPI(title=settings.app_title)
    app.state.settings = settings
    app.state.shift_service = ShiftService(
        repo, check_batch_overlaps=settings.check_batch_overlaps
    )
    app.include_router(router)

    @app.get("/health")
    def health() -> dict:
        return {"status": "ok"}

    logger.info(
        "App ready (seed_demo_data=%s, check_batch_overlaps=%s)",
        settings.seed_demo_data,
        settings.check_batch_overlaps,
    )
    return app


def run() -> None:
    settings = Settings()
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)
