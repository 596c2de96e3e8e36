import logging
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from uuid import uuid4

from app.core.config import settings
from app.services.booking_wizard import BookingWizard
from app.services.slot_service import SeededAvailability, SlotAvailabilityGenerator

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(UTC)


@dataclass
class BookingSession:
    id: str
    wizard: BookingWizard
    slots: SlotAvailabilityGenerator
    last_seen: datetime = field(default_factory=_utc_now)

    def touch(self) -> None:
        self.last_seen = _utc_now()


class BookingSessionStore:
    """One wizard per booking session; each session gets its own availability seed."""

    def __init__(self) -> None:
        self._sessions: dict[str, BookingSession] = {}

    def __len__(self) -> int:
        return len(self._sessions)

    def create(self) -> BookingSession:
        session_id = str(uuid4())
        source = SeededAvailability(session_id, settings.slot_availability_probability)
        session = BookingSession(
            id=session_id,
            wizard=BookingWizard(),
            slots=SlotAvailabilityGenerator(source),
        )
        self._sessions[session_id] = session
        return session

    def get(self, session_id: str) -> BookingSession | None:
        session = self._sessions.get(session_id)
        if session:
            session.touch()
        return session

    def purge_idle(self, max_idle: timedelta) -> int:
        """Drop sessions untouched for longer than max_idle. Returns count removed."""
        cutoff = _utc_now() - max_idle
        stale = [sid for sid, s in self._sessions.items() if s.last_seen < cutoff]
        for sid in stale:
            del self._sessions[sid]
        if stale:
            logger.debug("Purged %d idle booking session(s)", len(stale))
        return len(stale)


booking_sessions = BookingSessionStore()
