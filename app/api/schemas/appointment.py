from pydantic import BaseModel

from app.models.appointment import AppointmentStatus


class StatusUpdateRequest(BaseModel):
    status: AppointmentStatus


class StatusUpdateResponse(BaseModel):
    id: int
    status: AppointmentStatus
    message: str


class AppointmentStats(BaseModel):
    today: int
    pending: int
    this_month: int
