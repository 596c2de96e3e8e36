"""Test the booking wizard endpoints end to end."""

from datetime import UTC, datetime, timedelta

from app.core.config import settings
from app.services.slot_service import local_now

VALID_DETAILS = {
    "name": "Ana García",
    "email": "ana@x.com",
    "phone": "+34600000000",
    "service": "3",
    "notes": "",
}


def _new_booking(client) -> str:
    response = client.post("/api/v1/bookings")
    assert response.status_code == 201
    return response.json()["id"]


def _first_open_slot(client, booking_id: str) -> tuple[str, str]:
    """Find (date, slot start) of the first available slot from tomorrow on."""
    day = local_now().date() + timedelta(days=1)
    for _ in range(30):
        response = client.get(
            "/api/v1/slots/available",
            params={"date": day.isoformat(), "booking_id": booking_id},
        )
        if response.status_code == 200:
            for slot in response.json()["slots"]:
                if slot["available"]:
                    return day.isoformat(), slot["start"]
        day += timedelta(days=1)
    raise AssertionError("no open slot found")


def _at_details_step(client) -> str:
    booking_id = _new_booking(client)
    assert client.post(f"/api/v1/bookings/{booking_id}/start").status_code == 200
    day, start = _first_open_slot(client, booking_id)
    response = client.post(f"/api/v1/bookings/{booking_id}/slot", json={"date": day, "time": start})
    assert response.status_code == 200
    return booking_id


def test_services_catalog(client):
    response = client.get("/api/v1/services")

    assert response.status_code == 200
    assert [s["name"] for s in response.json()] == [
        "Web consulting",
        "Digital strategy",
        "UX/UI design",
        "Digital marketing",
        "Other service",
    ]


def test_new_booking_starts_at_welcome(client):
    booking_id = _new_booking(client)
    response = client.get(f"/api/v1/bookings/{booking_id}")

    assert response.status_code == 200
    data = response.json()
    assert data["step"] == "welcome"
    assert data["selection"] is None
    assert data["contact_details"] is None


def test_unknown_booking_returns_404(client):
    assert client.get("/api/v1/bookings/does-not-exist").status_code == 404
    assert client.post("/api/v1/bookings/does-not-exist/start").status_code == 404


def test_slots_for_a_date_have_business_hours_shape(client):
    day = local_now().date() + timedelta(days=2)
    response = client.get("/api/v1/slots/available", params={"date": day.isoformat()})

    assert response.status_code == 200
    slots = response.json()["slots"]
    assert len(slots) == 9
    starts = [datetime.fromisoformat(s["start"]) for s in slots]
    assert [s.hour for s in starts] == list(range(9, 18))
    assert all(s.date() == day for s in starts)


def test_slots_for_past_date_are_rejected(client):
    past = local_now().date() - timedelta(days=1)
    response = client.get("/api/v1/slots/available", params={"date": past.isoformat()})

    assert response.status_code == 409


def test_session_slots_are_stable_within_a_booking(client):
    booking_id = _new_booking(client)
    day = (local_now().date() + timedelta(days=3)).isoformat()
    params = {"date": day, "booking_id": booking_id}

    first = client.get("/api/v1/slots/available", params=params).json()
    second = client.get("/api/v1/slots/available", params=params).json()

    assert first == second


def test_available_dates_marks_past_days(client):
    yesterday = local_now().date() - timedelta(days=1)
    response = client.get("/api/v1/slots/dates", params={"start": yesterday.isoformat(), "days": 3})

    assert response.status_code == 200
    dates = response.json()["dates"]
    assert [d["available"] for d in dates] == [False, True, True]


def test_full_booking_flow_records_pending_appointment(client, admin_headers):
    booking_id = _at_details_step(client)

    response = client.post(f"/api/v1/bookings/{booking_id}/details", json=VALID_DETAILS)

    assert response.status_code == 200
    data = response.json()
    assert data["step"] == "confirmation"
    assert data["notification"] == {"outcome": "success"}
    assert data["contact_details"]["service_name"] == "UX/UI design"
    assert data["selection"] is not None

    pending = client.get(
        "/api/v1/appointments/admin", params={"status": "pending"}, headers=admin_headers
    ).json()
    assert "Ana García" in [a["name"] for a in pending]


def test_invalid_details_return_all_field_errors(client):
    booking_id = _at_details_step(client)

    response = client.post(
        f"/api/v1/bookings/{booking_id}/details",
        json={"name": "Al", "email": "bad", "phone": "123", "service": "1"},
    )

    assert response.status_code == 422
    body = response.json()
    assert body["outcome"] == "failure"
    assert set(body["errors"]) == {"email", "phone"}
    assert client.get(f"/api/v1/bookings/{booking_id}").json()["step"] == "complete_details"


def test_back_keeps_selection_then_reset_clears_it(client):
    booking_id = _at_details_step(client)
    selection = client.get(f"/api/v1/bookings/{booking_id}").json()["selection"]

    back = client.post(f"/api/v1/bookings/{booking_id}/back").json()
    assert back["step"] == "select_date_time"
    assert back["selection"] == selection
    assert back["contact_details"] is None

    reset = client.post(f"/api/v1/bookings/{booking_id}/reset").json()
    assert reset["step"] == "welcome"
    assert reset["selection"] is None


def test_out_of_order_calls_return_conflict(client):
    booking_id = _new_booking(client)

    assert client.post(f"/api/v1/bookings/{booking_id}/back").status_code == 409
    response = client.post(f"/api/v1/bookings/{booking_id}/details", json=VALID_DETAILS)
    assert response.status_code == 409
    assert "welcome" in response.json()["detail"]


def test_slot_outside_business_hours_is_rejected(client):
    booking_id = _new_booking(client)
    client.post(f"/api/v1/bookings/{booking_id}/start")
    day = local_now().date() + timedelta(days=1)

    response = client.post(
        f"/api/v1/bookings/{booking_id}/slot",
        json={"date": day.isoformat(), "time": f"{day.isoformat()}T20:00:00"},
    )

    assert response.status_code == 409
    assert client.get(f"/api/v1/bookings/{booking_id}").json()["step"] == "select_date_time"


def test_slot_on_past_date_is_rejected(client):
    booking_id = _new_booking(client)
    client.post(f"/api/v1/bookings/{booking_id}/start")
    past = local_now().date() - timedelta(days=1)

    response = client.post(
        f"/api/v1/bookings/{booking_id}/slot",
        json={"date": past.isoformat(), "time": f"{past.isoformat()}T10:00:00"},
    )

    assert response.status_code == 409


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_slot_time_with_utc_offset_books_the_local_slot(client):
    booking_id = _new_booking(client)
    client.post(f"/api/v1/bookings/{booking_id}/start")
    day, start = _first_open_slot(client, booking_id)
    local_start = datetime.fromisoformat(start)
    utc_start = local_start.replace(tzinfo=settings.tz).astimezone(UTC)

    response = client.post(
        f"/api/v1/bookings/{booking_id}/slot",
        json={"date": day, "time": utc_start.isoformat().replace("+00:00", "Z")},
    )

    assert response.status_code == 200
    assert datetime.fromisoformat(response.json()["selection"]["time"]) == local_start
