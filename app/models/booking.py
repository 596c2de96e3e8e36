from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum

from pydantic import BaseModel, EmailStr, Field


@dataclass(frozen=True)
class TimeSlot:
    time: datetime
    available: bool


@dataclass(frozen=True)
class BookingSelection:
    date: date
    time: datetime


class ContactDetails(BaseModel):
    name: str = Field(min_length=2)
    email: EmailStr
    phone: str = Field(min_length=9)
    service: str = Field(min_length=1)
    notes: str | None = None


class BookingStep(str, Enum):
    WELCOME = "welcome"
    SELECT_DATE_TIME = "select_date_time"
    COMPLETE_DETAILS = "complete_details"
    CONFIRMATION = "confirmation"


# One variant per wizard step; each carries only the data valid in that step.


@dataclass(frozen=True)
class Welcome:
    step = BookingStep.WELCOME


@dataclass(frozen=True)
class SelectDateTime:
    # Kept after back() so the form can show the last pick; overwritten on the next selection.
    previous_selection: BookingSelection | None = None
    step = BookingStep.SELECT_DATE_TIME


@dataclass(frozen=True)
class CompleteDetails:
    selection: BookingSelection
    step = BookingStep.COMPLETE_DETAILS


@dataclass(frozen=True)
class Confirmation:
    selection: BookingSelection
    contact_details: ContactDetails
    step = BookingStep.CONFIRMATION


BookingState = Welcome | SelectDateTime | CompleteDetails | Confirmation
