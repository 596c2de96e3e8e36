import hashlib
import random
from collections.abc import Callable, Iterable
from datetime import date, datetime, timedelta
from typing import Protocol

from app.core.config import settings
from app.models.booking import TimeSlot


class AvailabilitySource(Protocol):
    def is_available(self, slot_time: datetime) -> bool: ...


class RandomAvailability:
    """Fresh draw per slot on every call; the same date can come back different."""

    def __init__(self, probability: float = 0.7, rng: random.Random | None = None) -> None:
        self.probability = probability
        self._rng = rng or random.Random()

    def is_available(self, slot_time: datetime) -> bool:
        return self._rng.random() < self.probability


class SeededAvailability:
    """Deterministic per (seed, slot time): a booking session always sees the same pattern."""

    def __init__(self, seed: str, probability: float = 0.7) -> None:
        self.seed = seed
        self.probability = probability

    def is_available(self, slot_time: datetime) -> bool:
        digest = hashlib.sha256(f"{self.seed}:{slot_time.isoformat()}".encode()).digest()
        return random.Random(digest).random() < self.probability


class FixedAvailability:
    """Availability from a predicate, or from flags indexed by the slot's position in its day.

    Positions past the end of the flag list are unavailable.
    """

    def __init__(self, flags: Iterable[bool] | Callable[[datetime], bool]) -> None:
        if callable(flags):
            self._predicate = flags
            self._flags: list[bool] = []
        else:
            self._predicate = None
            self._flags = list(flags)

    def is_available(self, slot_time: datetime) -> bool:
        if self._predicate is not None:
            return self._predicate(slot_time)
        day_start = slot_time.replace(
            hour=settings.business_start_hour, minute=0, second=0, microsecond=0
        )
        index = (slot_time - day_start) // timedelta(minutes=settings.slot_duration_minutes)
        return 0 <= index < len(self._flags) and self._flags[index]


def _slot_times_for_date(d: date) -> list[datetime]:
    """Slot start times for the given date within business hours (local, naive)."""
    slots: list[datetime] = []
    start = datetime(d.year, d.month, d.day, settings.business_start_hour, 0, 0)
    end = datetime(d.year, d.month, d.day, settings.business_end_hour, 0, 0)
    delta = timedelta(minutes=settings.slot_duration_minutes)
    current = start
    while current < end:
        slots.append(current)
        current += delta
    return slots


class SlotAvailabilityGenerator:
    def __init__(self, source: AvailabilitySource | None = None) -> None:
        self.source = source or RandomAvailability(settings.slot_availability_probability)

    def generate(self, d: date) -> list[TimeSlot]:
        """Ordered slots for the day, each flagged independently by the availability source."""
        if isinstance(d, datetime):
            d = d.date()
        return [TimeSlot(time=t, available=self.source.is_available(t)) for t in _slot_times_for_date(d)]

    def is_slot_available(self, d: date, slot_time: datetime) -> bool:
        for slot in self.generate(d):
            if slot.time == slot_time:
                return slot.available
        return False


class DateAvailabilityPolicy:
    def __init__(self, unavailable_dates: Iterable[date] | None = None) -> None:
        if unavailable_dates is None:
            unavailable_dates = settings.unavailable_dates_set
        self.unavailable_dates = frozenset(
            d.date() if isinstance(d, datetime) else d for d in unavailable_dates
        )

    def is_available(self, candidate: date, now: datetime) -> bool:
        """Past dates (by calendar day) and listed dates cannot be selected."""
        if isinstance(candidate, datetime):
            candidate = candidate.date()
        if candidate < now.date():
            return False
        if candidate in self.unavailable_dates:
            return False
        return True

    def available_dates(self, start: date, days: int, now: datetime) -> list[tuple[date, bool]]:
        """Returns list of (date, available) for `days` consecutive dates from `start`."""
        out: list[tuple[date, bool]] = []
        for offset in range(days):
            d = start + timedelta(days=offset)
            out.append((d, self.is_available(d, now)))
        return out


def local_now() -> datetime:
    """Current wall-clock time in the business timezone, as naive local time."""
    return datetime.now(settings.tz).replace(tzinfo=None)
