from datetime import date, datetime
from itertools import count

from app.models.appointment import Appointment, AppointmentCreate, AppointmentStatus
from app.models.booking import BookingSelection, ContactDetails
from app.models.service import get_service_name

SAMPLE_APPOINTMENTS: tuple[AppointmentCreate, ...] = (
    AppointmentCreate(
        name="Carlos Rodríguez",
        email="carlos@example.com",
        phone="+34 612 345 678",
        slot_start=datetime(2023, 11, 25, 10, 0),
        service_id="1",
        status=AppointmentStatus.CONFIRMED,
        notes="First consultation for an e-commerce project",
    ),
    AppointmentCreate(
        name="María López",
        email="maria@example.com",
        phone="+34 623 456 789",
        slot_start=datetime(2023, 11, 26, 12, 0),
        service_id="2",
        status=AppointmentStatus.CONFIRMED,
        notes="",
    ),
    AppointmentCreate(
        name="Juan Pérez",
        email="juan@example.com",
        phone="+34 634 567 890",
        slot_start=datetime(2023, 11, 27, 16, 0),
        service_id="3",
        status=AppointmentStatus.PENDING,
        notes="Needs an urgent consultation",
    ),
    AppointmentCreate(
        name="Ana Martínez",
        email="ana@example.com",
        phone="+34 645 678 901",
        slot_start=datetime(2023, 11, 28, 11, 0),
        service_id="4",
        status=AppointmentStatus.CANCELLED,
        notes="",
    ),
    AppointmentCreate(
        name="Roberto Sánchez",
        email="roberto@example.com",
        phone="+34 656 789 012",
        slot_start=datetime(2023, 11, 29, 15, 30),
        service_id="1",
        status=AppointmentStatus.CONFIRMED,
        notes="Second follow-up",
    ),
)


def _matches_search(a: Appointment, term: str) -> bool:
    needle = term.lower()
    haystack = (a.name, a.email, a.phone, get_service_name(a.service_id), a.notes or "")
    return any(needle in value.lower() for value in haystack)


class AppointmentStore:
    def __init__(self) -> None:
        self._appointments: dict[int, Appointment] = {}
        self._ids = count(1)

    def add(self, data: AppointmentCreate) -> Appointment:
        appointment = Appointment(id=next(self._ids), **data.model_dump())
        self._appointments[appointment.id] = appointment
        return appointment

    def seed(self, samples: tuple[AppointmentCreate, ...] = SAMPLE_APPOINTMENTS) -> None:
        for data in samples:
            self.add(data)

    def clear(self) -> None:
        self._appointments.clear()
        self._ids = count(1)

    def get(self, appointment_id: int) -> Appointment | None:
        return self._appointments.get(appointment_id)

    def record_booking(self, selection: BookingSelection, details: ContactDetails) -> Appointment:
        """Store a confirmed wizard booking for the admin to triage."""
        return self.add(
            AppointmentCreate(
                name=details.name,
                email=str(details.email),
                phone=details.phone,
                slot_start=selection.time,
                service_id=details.service,
                notes=details.notes,
                status=AppointmentStatus.PENDING,
            )
        )

    def list_appointments(
        self,
        status: AppointmentStatus | str | None = None,
        on_date: date | None = None,
        search: str | None = None,
    ) -> list[Appointment]:
        """Filter by status ("all" or None for every status), slot date and free-text search."""
        out: list[Appointment] = []
        for a in sorted(self._appointments.values(), key=lambda a: a.slot_start):
            if status and status != "all" and a.status != AppointmentStatus(status):
                continue
            if on_date and a.slot_start.date() != on_date:
                continue
            if search and not _matches_search(a, search):
                continue
            out.append(a)
        return out

    def set_status(self, appointment_id: int, status: AppointmentStatus) -> Appointment | None:
        appointment = self._appointments.get(appointment_id)
        if not appointment:
            return None
        appointment.status = status
        return appointment

    def stats(self, today: date) -> dict[str, int]:
        appointments = list(self._appointments.values())
        return {
            "today": sum(1 for a in appointments if a.slot_start.date() == today),
            "pending": sum(1 for a in appointments if a.status == AppointmentStatus.PENDING),
            "this_month": sum(
                1
                for a in appointments
                if (a.slot_start.year, a.slot_start.month) == (today.year, today.month)
            ),
        }


appointments_store = AppointmentStore()
