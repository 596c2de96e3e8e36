from datetime import date, datetime
from typing import Any

from pydantic import BaseModel


class SlotInfo(BaseModel):
    start: datetime
    end: datetime
    available: bool


class AvailableSlotsResponse(BaseModel):
    date: str  # YYYY-MM-DD
    slots: list[SlotInfo]


class DateInfo(BaseModel):
    date: date
    available: bool


class AvailableDatesResponse(BaseModel):
    dates: list[DateInfo]


class SelectSlotRequest(BaseModel):
    date: date
    time: datetime


class SelectionView(BaseModel):
    date: date
    time: datetime


class ContactDetailsView(BaseModel):
    name: str
    email: str
    phone: str
    service: str
    service_name: str
    notes: str | None = None


class Notification(BaseModel):
    outcome: str  # "success" | "failure"


class BookingView(BaseModel):
    id: str
    step: str
    selection: SelectionView | None = None
    contact_details: ContactDetailsView | None = None
    notification: Notification | None = None


class DetailsErrorResponse(BaseModel):
    outcome: str = "failure"
    errors: dict[str, str]


# Raw form body; validated by validate_contact_details so all field errors come back together.
DetailsRequest = dict[str, Any]
