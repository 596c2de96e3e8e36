from datetime import datetime
from enum import Enum

from sqlmodel import Field, SQLModel


class AppointmentStatus(str, Enum):
    CONFIRMED = "confirmed"
    PENDING = "pending"
    CANCELLED = "cancelled"


class AppointmentCreate(SQLModel):
    name: str
    email: str
    phone: str
    slot_start: datetime
    service_id: str
    notes: str | None = None
    status: AppointmentStatus = AppointmentStatus.PENDING


class Appointment(AppointmentCreate):
    id: int
    created_at: datetime = Field(default_factory=datetime.now)


class AppointmentAdminPublic(SQLModel):
    id: int
    name: str
    email: str
    phone: str
    slot_start: datetime
    service_id: str
    service_name: str
    status: AppointmentStatus
    notes: str | None = None
    created_at: datetime
