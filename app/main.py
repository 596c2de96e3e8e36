import asyncio
import logging
import os
from contextlib import asynccontextmanager
from datetime import timedelta

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api.routes import appointments, auth, bookings, slots
from app.core.config import settings, _ENV_FILE
from app.services.appointment_service import appointments_store
from app.services.auth_service import admin_sessions
from app.services.booking_session_service import booking_sessions

if os.getenv("ENV") != "production":
    logging.basicConfig(level=logging.DEBUG)
else:
    logging.basicConfig(
        level=logging.INFO,
        format='{"time": "%(asctime)s", "level": "%(levelname)s", "message": "%(message)s"}',
    )
logger = logging.getLogger(__name__)

PURGE_INTERVAL_SECONDS = 5 * 60  # 5 minutes


def _purge_sessions() -> None:
    """Drop idle wizard sessions and expired admin sessions."""
    try:
        n = booking_sessions.purge_idle(timedelta(minutes=settings.booking_session_ttl_minutes))
        if n:
            logger.info("Session purge: removed %d idle booking session(s)", n)
        n = admin_sessions.purge_expired()
        if n:
            logger.info("Session purge: removed %d expired admin session(s)", n)
    except Exception as e:
        logger.exception("Session purge failed: %s", e)


async def _purge_loop() -> None:
    while True:
        await asyncio.sleep(PURGE_INTERVAL_SECONDS)
        _purge_sessions()


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Loading .env from: %s (exists: %s)", _ENV_FILE, _ENV_FILE.exists())
    if settings.seed_sample_appointments and not appointments_store.list_appointments():
        appointments_store.seed()
        logger.info("Seeded sample appointments")
    _purge_sessions()
    task = asyncio.create_task(_purge_loop())
    yield
    task.cancel()
    try:
        await task
    except asyncio.CancelledError:
        pass


app = FastAPI(
    title="CitaFácil API",
    description="Appointment booking wizard and admin appointment triage",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PATCH", "OPTIONS"],
    allow_headers=["Authorization", "Content-Type"],
)

app.include_router(slots.router, prefix="/api/v1")
app.include_router(bookings.router, prefix="/api/v1")
app.include_router(auth.router, prefix="/api/v1")
app.include_router(appointments.router, prefix="/api/v1")


def _error_cors_headers(request: Request) -> dict[str, str]:
    """500 responses bypass CORSMiddleware, so echo the allowed origin here."""
    origins = settings.cors_origins_list
    origin = request.headers.get("origin")
    if origin not in origins:
        origin = origins[0] if origins else None
    if not origin:
        return {}
    return {"Access-Control-Allow-Origin": origin, "Access-Control-Allow-Credentials": "true"}


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content={"detail": f"{type(exc).__name__}: {exc}"},
        headers=_error_cors_headers(request),
    )


@app.get("/health")
async def health() -> dict:
    return {"status": "ok"}
