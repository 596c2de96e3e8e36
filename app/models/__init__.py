from app.models.admin_session import AdminSession, AdminSessionPublic
from app.models.appointment import (
    Appointment,
    AppointmentAdminPublic,
    AppointmentCreate,
    AppointmentStatus,
)
from app.models.booking import (
    BookingSelection,
    BookingState,
    BookingStep,
    CompleteDetails,
    Confirmation,
    ContactDetails,
    SelectDateTime,
    TimeSlot,
    Welcome,
)
from app.models.service import SERVICE_CATALOG, Service, get_service_name

__all__ = [
    "AdminSession",
    "AdminSessionPublic",
    "Appointment",
    "AppointmentAdminPublic",
    "AppointmentCreate",
    "AppointmentStatus",
    "BookingSelection",
    "BookingState",
    "BookingStep",
    "CompleteDetails",
    "Confirmation",
    "ContactDetails",
    "SelectDateTime",
    "TimeSlot",
    "Welcome",
    "SERVICE_CATALOG",
    "Service",
    "get_service_name",
]
