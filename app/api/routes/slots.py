from datetime import date, timedelta

from fastapi import APIRouter, Depends, HTTPException, Query, status

from app.api.deps import get_booking_sessions
from app.api.schemas.booking import (
    AvailableDatesResponse,
    AvailableSlotsResponse,
    DateInfo,
    SlotInfo,
)
from app.core.config import settings
from app.models.service import SERVICE_CATALOG, Service
from app.services.booking_session_service import BookingSessionStore
from app.services.slot_service import (
    DateAvailabilityPolicy,
    SlotAvailabilityGenerator,
    local_now,
)

router = APIRouter(tags=["slots"])

# Used when no booking session is given: fresh random availability on every call.
_anonymous_slots = SlotAvailabilityGenerator()


@router.get("/services", response_model=list[Service])
async def list_services() -> list[Service]:
    return list(SERVICE_CATALOG)


@router.get("/slots/dates", response_model=AvailableDatesResponse)
async def available_dates(
    start: date | None = Query(None),
    days: int = Query(31, ge=1, le=92),
) -> AvailableDatesResponse:
    """Selectable dates for the calendar; disabled dates come back with available=false."""
    now = local_now()
    policy = DateAvailabilityPolicy()
    dates = policy.available_dates(start or now.date(), days, now)
    return AvailableDatesResponse(dates=[DateInfo(date=d, available=ok) for d, ok in dates])


@router.get("/slots/available", response_model=AvailableSlotsResponse)
async def available_slots(
    date_param: date = Query(..., alias="date"),
    booking_id: str | None = Query(None),
    sessions: BookingSessionStore = Depends(get_booking_sessions),
) -> AvailableSlotsResponse:
    """Return all slots for the given date. Each slot has start, end, and available (bool)."""
    if not DateAvailabilityPolicy().is_available(date_param, local_now()):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Date not available for booking",
        )
    generator = _anonymous_slots
    if booking_id:
        session = sessions.get(booking_id)
        if not session:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Booking session not found or expired",
            )
        generator = session.slots
    duration = timedelta(minutes=settings.slot_duration_minutes)
    return AvailableSlotsResponse(
        date=date_param.isoformat(),
        slots=[
            SlotInfo(start=s.time, end=s.time + duration, available=s.available)
            for s in generator.generate(date_param)
        ],
    )
