import logging
from datetime import datetime, timedelta
from uuid import uuid4

from app.core.config import settings
from app.core.security import admin_password_hash, create_access_token, verify_password
from app.models.admin_session import AdminSession, AdminSessionPublic

logger = logging.getLogger(__name__)


class AdminSessionRegistry:
    """Live admin sessions: created on login, dropped on logout or once their token expires."""

    def __init__(self, ttl: timedelta | None = None) -> None:
        self._sessions: dict[str, AdminSession] = {}
        self.ttl = ttl or timedelta(minutes=settings.access_token_expire_minutes)

    def __len__(self) -> int:
        return len(self._sessions)

    def open(self, email: str) -> AdminSession:
        now = datetime.now()
        session = AdminSession(
            session_id=str(uuid4()), email=email, created_at=now, expires_at=now + self.ttl
        )
        self._sessions[session.session_id] = session
        return session

    def get(self, session_id: str) -> AdminSession | None:
        session = self._sessions.get(session_id)
        if session and session.is_expired(datetime.now()):
            del self._sessions[session_id]
            return None
        return session

    def close(self, session_id: str) -> bool:
        return self._sessions.pop(session_id, None) is not None

    def purge_expired(self, now: datetime | None = None) -> int:
        """Drop sessions past their expiry. Returns count removed."""
        now = now or datetime.now()
        expired = [sid for sid, s in self._sessions.items() if s.is_expired(now)]
        for sid in expired:
            del self._sessions[sid]
        return len(expired)

    def clear(self) -> None:
        self._sessions.clear()


admin_sessions = AdminSessionRegistry()


def check_admin_credentials(email: str, password: str) -> bool:
    if email.lower() != settings.admin_email.lower():
        return False
    return verify_password(password, admin_password_hash())


def login_admin(
    registry: AdminSessionRegistry, email: str, password: str
) -> tuple[AdminSession, str, int] | None:
    if not check_admin_credentials(email, password):
        logger.info("Admin login rejected for %s", email)
        return None
    session = registry.open(email)
    token = create_access_token(email, session.session_id)
    expires_in = settings.access_token_expire_minutes * 60
    logger.info("Admin login: session %s opened", session.session_id)
    return session, token, expires_in


def logout_admin(registry: AdminSessionRegistry, session_id: str) -> None:
    if registry.close(session_id):
        logger.info("Admin logout: session %s closed", session_id)


def session_to_public(session: AdminSession) -> AdminSessionPublic:
    return AdminSessionPublic(
        email=session.email, created_at=session.created_at, expires_at=session.expires_at
    )
