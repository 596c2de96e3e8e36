import logging
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query, status

from app.api.deps import get_admin_session, get_appointment_store
from app.api.schemas.appointment import (
    AppointmentStats,
    StatusUpdateRequest,
    StatusUpdateResponse,
)
from app.models.admin_session import AdminSession
from app.models.appointment import Appointment, AppointmentAdminPublic, AppointmentStatus
from app.models.service import get_service_name
from app.services.appointment_service import AppointmentStore
from app.services.slot_service import local_now

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/appointments", tags=["appointments"])

_STATUS_MESSAGES = {
    AppointmentStatus.CONFIRMED: "Appointment confirmed",
    AppointmentStatus.CANCELLED: "Appointment cancelled",
    AppointmentStatus.PENDING: "Appointment marked as pending",
}


def _to_admin_public(a: Appointment) -> AppointmentAdminPublic:
    return AppointmentAdminPublic(
        id=a.id,
        name=a.name,
        email=a.email,
        phone=a.phone,
        slot_start=a.slot_start,
        service_id=a.service_id,
        service_name=get_service_name(a.service_id),
        status=a.status,
        notes=a.notes,
        created_at=a.created_at,
    )


@router.get("/admin", response_model=list[AppointmentAdminPublic])
async def list_appointments_admin(
    status_param: str = Query("all", alias="status", pattern="^(all|confirmed|pending|cancelled)$"),
    on_date: date | None = Query(None, alias="date"),
    q: str | None = Query(None),
    store: AppointmentStore = Depends(get_appointment_store),
    admin: AdminSession = Depends(get_admin_session),
) -> list[AppointmentAdminPublic]:
    """Admin endpoint: list appointments filtered by status, slot date and search term."""
    appointments = store.list_appointments(status=status_param, on_date=on_date, search=q)
    return [_to_admin_public(a) for a in appointments]


@router.get("/admin/stats", response_model=AppointmentStats)
async def appointment_stats(
    store: AppointmentStore = Depends(get_appointment_store),
    admin: AdminSession = Depends(get_admin_session),
) -> AppointmentStats:
    return AppointmentStats(**store.stats(local_now().date()))


@router.patch("/{appointment_id}/status", response_model=StatusUpdateResponse)
async def update_appointment_status(
    appointment_id: int,
    body: StatusUpdateRequest,
    store: AppointmentStore = Depends(get_appointment_store),
    admin: AdminSession = Depends(get_admin_session),
) -> StatusUpdateResponse:
    appointment = store.set_status(appointment_id, body.status)
    if not appointment:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Appointment not found",
        )
    logger.info("Appointment %d set to %s by %s", appointment_id, body.status.value, admin.email)
    return StatusUpdateResponse(
        id=appointment.id,
        status=appointment.status,
        message=_STATUS_MESSAGES[appointment.status],
    )
