"""Tests for the in-memory appointment store used by the admin view."""

from datetime import date, datetime

import pytest

from app.models.appointment import AppointmentStatus
from app.models.booking import BookingSelection, ContactDetails
from app.services.appointment_service import AppointmentStore


@pytest.fixture
def store():
    s = AppointmentStore()
    s.seed()
    return s


def test_seed_loads_sample_appointments_in_slot_order(store):
    appointments = store.list_appointments()

    assert len(appointments) == 5
    assert [a.id for a in appointments] == [1, 2, 3, 4, 5]
    assert appointments[0].name == "Carlos Rodríguez"


def test_filter_by_status(store):
    assert [a.name for a in store.list_appointments(status="pending")] == ["Juan Pérez"]
    assert len(store.list_appointments(status=AppointmentStatus.CONFIRMED)) == 3
    assert len(store.list_appointments(status="all")) == 5


def test_filter_by_slot_date(store):
    result = store.list_appointments(on_date=date(2023, 11, 28))

    assert [a.name for a in result] == ["Ana Martínez"]


def test_search_is_case_insensitive_across_fields(store):
    assert [a.name for a in store.list_appointments(search="URGENT")] == ["Juan Pérez"]
    assert [a.name for a in store.list_appointments(search="ux/ui")] == ["Juan Pérez"]
    assert [a.name for a in store.list_appointments(search="623 456")] == ["María López"]
    assert len(store.list_appointments(search="web consulting")) == 2


def test_filters_combine(store):
    result = store.list_appointments(status="confirmed", search="web consulting")

    assert [a.name for a in result] == ["Carlos Rodríguez", "Roberto Sánchez"]
    assert store.list_appointments(status="cancelled", search="carlos") == []


def test_set_status(store):
    updated = store.set_status(3, AppointmentStatus.CONFIRMED)

    assert updated.status == AppointmentStatus.CONFIRMED
    assert store.get(3).status == AppointmentStatus.CONFIRMED
    assert store.set_status(42, AppointmentStatus.CANCELLED) is None


def test_stats(store):
    assert store.stats(date(2023, 11, 27)) == {"today": 1, "pending": 1, "this_month": 5}
    assert store.stats(date(2024, 1, 1)) == {"today": 0, "pending": 1, "this_month": 0}


def test_record_booking_adds_pending_appointment(store):
    selection = BookingSelection(date=date(2031, 6, 2), time=datetime(2031, 6, 2, 10, 0))
    details = ContactDetails(
        name="Ana García", email="ana@x.com", phone="+34600000000", service="3", notes=None
    )

    appointment = store.record_booking(selection, details)

    assert appointment.id == 6
    assert appointment.status == AppointmentStatus.PENDING
    assert appointment.slot_start == datetime(2031, 6, 2, 10, 0)
    assert appointment.email == "ana@x.com"
    assert store.get(6) is appointment


def test_clear_resets_ids(store):
    store.clear()
    assert store.list_appointments() == []

    store.seed()
    assert store.list_appointments()[0].id == 1
