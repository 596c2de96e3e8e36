from datetime import date
from pathlib import Path
from zoneinfo import ZoneInfo

from pydantic_settings import BaseSettings, SettingsConfigDict

# Resolve .env from project root so it loads regardless of cwd
_BACKEND_ROOT = Path(__file__).resolve().parent.parent.parent
_ENV_FILE = _BACKEND_ROOT / ".env"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=(str(_ENV_FILE), ".env", "../.env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # JWT (admin session tokens)
    secret_key: str
    access_token_expire_minutes: int = 60
    algorithm: str = "HS256"

    # CORS
    cors_origins: str = "http://localhost:5173"

    # Admin credentials (static check, no user table)
    admin_email: str = "admin@example.com"
    admin_password: str = "123456"

    # Slot/booking business rules
    timezone: str = "Europe/Madrid"
    slot_duration_minutes: int = 60
    business_start_hour: int = 9
    business_end_hour: int = 18  # exclusive, so last slot starts at 17:00
    slot_availability_probability: float = 0.7
    # Comma-separated ISO dates that cannot be booked at all
    unavailable_dates: str = "2023-11-23,2023-11-24"
    # Wizard sessions untouched for this long are dropped
    booking_session_ttl_minutes: int = 60
    seed_sample_appointments: bool = True

    # Env
    env: str = "development"

    # Email (SMTP). Leave smtp_host empty to disable sending.
    smtp_host: str = ""
    smtp_port: int = 587
    smtp_user: str = ""
    smtp_password: str = ""
    from_email: str = ""
    from_name: str = "CitaFácil"
    # Branding and contact in footer
    site_name: str = "CitaFácil"
    contact_email: str = "info@citafacil.es"
    contact_phone: str = "+34 900 123 456"
    contact_address: str = "Calle Principal 123, Madrid"

    @property
    def cors_origins_list(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    @property
    def unavailable_dates_set(self) -> frozenset[date]:
        return frozenset(
            date.fromisoformat(d.strip()) for d in self.unavailable_dates.split(",") if d.strip()
        )

    @property
    def tz(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)

    @property
    def email_enabled(self) -> bool:
        return bool(self.smtp_host and self.smtp_user and self.smtp_password and self.from_email)


settings = Settings()
