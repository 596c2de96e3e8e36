from datetime import datetime

from sqlmodel import SQLModel


class AdminSession(SQLModel):
    session_id: str
    email: str
    created_at: datetime
    expires_at: datetime

    def is_expired(self, now: datetime) -> bool:
        return now >= self.expires_at


class AdminSessionPublic(SQLModel):
    email: str
    created_at: datetime
    expires_at: datetime
