import logging

from fastapi import APIRouter, BackgroundTasks, Body, Depends, HTTPException, status
from fastapi.responses import JSONResponse

from app.api.deps import get_appointment_store, get_booking_session, get_booking_sessions
from app.api.schemas.booking import (
    BookingView,
    ContactDetailsView,
    DetailsErrorResponse,
    DetailsRequest,
    Notification,
    SelectionView,
    SelectSlotRequest,
)
from app.core.config import settings
from app.models.service import get_service_name
from app.services.appointment_service import AppointmentStore
from app.services.booking_session_service import BookingSession, BookingSessionStore
from app.services.booking_wizard import IllegalTransitionError
from app.services.email_service import send_booking_confirmation_email
from app.services.slot_service import DateAvailabilityPolicy, local_now
from app.services.validation_service import validate_contact_details

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/bookings", tags=["bookings"])


def _to_view(session: BookingSession, notification: Notification | None = None) -> BookingView:
    wizard = session.wizard
    selection = wizard.selection
    details = wizard.contact_details
    return BookingView(
        id=session.id,
        step=wizard.step.value,
        selection=SelectionView(date=selection.date, time=selection.time) if selection else None,
        contact_details=ContactDetailsView(
            name=details.name,
            email=str(details.email),
            phone=details.phone,
            service=details.service,
            service_name=get_service_name(details.service),
            notes=details.notes,
        )
        if details
        else None,
        notification=notification,
    )


def _conflict(e: IllegalTransitionError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))


@router.post("", response_model=BookingView, status_code=status.HTTP_201_CREATED)
async def create_booking(
    store: BookingSessionStore = Depends(get_booking_sessions),
) -> BookingView:
    return _to_view(store.create())


@router.get("/{booking_id}", response_model=BookingView)
async def get_booking(session: BookingSession = Depends(get_booking_session)) -> BookingView:
    return _to_view(session)


@router.post("/{booking_id}/start", response_model=BookingView)
async def start_booking(session: BookingSession = Depends(get_booking_session)) -> BookingView:
    try:
        session.wizard.start()
    except IllegalTransitionError as e:
        raise _conflict(e) from e
    return _to_view(session)


@router.post("/{booking_id}/slot", response_model=BookingView)
async def select_slot(
    body: SelectSlotRequest,
    session: BookingSession = Depends(get_booking_session),
) -> BookingView:
    # The wizard trusts its caller; both preconditions are enforced here.
    if not DateAvailabilityPolicy().is_available(body.date, local_now()):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Date not available for booking",
        )
    # Slots are naive business-local times; convert offset-aware input first.
    slot_time = body.time
    if slot_time.tzinfo is not None:
        slot_time = slot_time.astimezone(settings.tz)
    slot_time = slot_time.replace(tzinfo=None)
    if slot_time.date() != body.date or not session.slots.is_slot_available(body.date, slot_time):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Time slot not available",
        )
    try:
        session.wizard.select_slot(body.date, slot_time)
    except IllegalTransitionError as e:
        raise _conflict(e) from e
    return _to_view(session)


@router.post("/{booking_id}/back", response_model=BookingView)
async def go_back(session: BookingSession = Depends(get_booking_session)) -> BookingView:
    try:
        session.wizard.back()
    except IllegalTransitionError as e:
        raise _conflict(e) from e
    return _to_view(session)


@router.post(
    "/{booking_id}/details",
    response_model=BookingView,
    responses={422: {"model": DetailsErrorResponse}},
)
async def submit_details(
    background_tasks: BackgroundTasks,
    body: DetailsRequest = Body(...),
    session: BookingSession = Depends(get_booking_session),
    appointments: AppointmentStore = Depends(get_appointment_store),
):
    result = validate_contact_details(body)
    if not result.is_valid:
        return JSONResponse(
            status_code=422,
            content=DetailsErrorResponse(errors=result.errors).model_dump(),
        )
    try:
        session.wizard.submit_details(result.details)
    except IllegalTransitionError as e:
        raise _conflict(e) from e

    selection = session.wizard.selection
    details = result.details
    appointment = appointments.record_booking(selection, details)
    logger.info("Booking %s confirmed as appointment %d", session.id, appointment.id)
    background_tasks.add_task(
        send_booking_confirmation_email,
        to_email=str(details.email),
        recipient_name=details.name,
        slot_start=selection.time,
        service_name=get_service_name(details.service),
        notes=details.notes,
    )
    return _to_view(session, Notification(outcome="success"))


@router.post("/{booking_id}/reset", response_model=BookingView)
async def reset_booking(session: BookingSession = Depends(get_booking_session)) -> BookingView:
    session.wizard.reset()
    return _to_view(session)
