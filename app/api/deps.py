from fastapi import Depends, HTTPException, Path, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.core.security import decode_access_token
from app.models.admin_session import AdminSession
from app.services.appointment_service import AppointmentStore, appointments_store
from app.services.auth_service import AdminSessionRegistry, admin_sessions
from app.services.booking_session_service import (
    BookingSession,
    BookingSessionStore,
    booking_sessions,
)

security = HTTPBearer(auto_error=False)


def get_booking_sessions() -> BookingSessionStore:
    return booking_sessions


def get_appointment_store() -> AppointmentStore:
    return appointments_store


def get_admin_registry() -> AdminSessionRegistry:
    return admin_sessions


def get_booking_session(
    booking_id: str = Path(...),
    store: BookingSessionStore = Depends(get_booking_sessions),
) -> BookingSession:
    session = store.get(booking_id)
    if not session:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Booking session not found or expired",
        )
    return session


def get_admin_session(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    registry: AdminSessionRegistry = Depends(get_admin_registry),
) -> AdminSession:
    if not credentials or credentials.scheme.lower() != "bearer":
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing or invalid authorization header",
            headers={"WWW-Authenticate": "Bearer"},
        )
    email, session_id = decode_access_token(credentials.credentials)
    if not email or not session_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )
    session = registry.get(session_id)
    if not session:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Session closed",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return session
