import logging
import smtplib
from datetime import datetime, timedelta
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from html import escape

from app.core.config import settings

logger = logging.getLogger(__name__)


def _send_email_sync(to_email: str, subject: str, html_body: str) -> None:
    """Send email via SMTP (blocking). Use from background task."""
    if not settings.email_enabled:
        logger.debug("Email disabled (SMTP not configured), skipping send")
        return
    msg = MIMEMultipart("alternative")
    msg["Subject"] = subject
    msg["From"] = f"{settings.from_name} <{settings.from_email}>"
    msg["To"] = to_email
    msg.attach(MIMEText(html_body, "html", "utf-8"))
    try:
        with smtplib.SMTP(settings.smtp_host, settings.smtp_port) as server:
            server.starttls()
            server.login(settings.smtp_user, settings.smtp_password)
            server.sendmail(settings.from_email, [to_email], msg.as_string())
        logger.info("Email sent to %s", to_email)
    except Exception as e:
        logger.exception("Failed to send email to %s: %s", to_email, e)


def build_booking_confirmation_html(
    recipient_name: str,
    slot_start: datetime,
    duration_minutes: int,
    service_name: str,
    notes: str | None,
) -> str:
    date_str = slot_start.strftime("%A, %B %d, %Y")
    end = slot_start + timedelta(minutes=duration_minutes)
    slot_display = f"{slot_start:%H:%M} – {end:%H:%M} h"
    notes_section = ""
    if notes:
        notes_section = f"""
        <p style="margin:0 0 8px 0;color:#374151;"><strong>Your notes:</strong></p>
        <p style="margin:0 0 24px 0;color:#6b7280;font-size:14px;">{escape(notes)}</p>
        """
    return f"""
<!DOCTYPE html>
<html>
<head>
  <meta charset="utf-8">
  <title>Appointment Confirmation</title>
</head>
<body style="margin:0;padding:32px 16px;font-family:-apple-system,'Segoe UI',Roboto,sans-serif;background-color:#f3f4f6;">
  <div style="max-width:560px;margin:0 auto;background:#ffffff;border-radius:12px;padding:32px;">
    <h1 style="margin:0 0 8px 0;font-size:22px;color:#111827;">Appointment booked</h1>
    <p style="margin:0 0 24px 0;font-size:15px;color:#6b7280;">Hi {escape(recipient_name) or 'there'}, your appointment is booked.</p>
    <p style="margin:0;font-size:12px;text-transform:uppercase;color:#6b7280;">Service</p>
    <p style="margin:0 0 12px 0;font-size:16px;font-weight:600;color:#111827;">{escape(service_name)}</p>
    <p style="margin:0;font-size:12px;text-transform:uppercase;color:#6b7280;">Date</p>
    <p style="margin:0 0 12px 0;font-size:16px;font-weight:600;color:#111827;">{date_str}</p>
    <p style="margin:0;font-size:12px;text-transform:uppercase;color:#6b7280;">Time</p>
    <p style="margin:0 0 24px 0;font-size:16px;font-weight:600;color:#111827;">{slot_display}</p>
    {notes_section}
    <p style="margin:24px 0 4px 0;font-size:13px;font-weight:600;color:#111827;">{settings.site_name}</p>
    <p style="margin:0;font-size:13px;color:#6b7280;">
      {settings.contact_email} &nbsp;·&nbsp; {settings.contact_phone}<br>
      {settings.contact_address}
    </p>
  </div>
</body>
</html>
"""


def send_booking_confirmation_email(
    to_email: str,
    recipient_name: str,
    slot_start: datetime,
    service_name: str,
    notes: str | None = None,
) -> None:
    """Compose and send booking confirmation (call from background task)."""
    subject = f"{settings.site_name} – Appointment booked"
    html = build_booking_confirmation_html(
        recipient_name=recipient_name,
        slot_start=slot_start,
        duration_minutes=settings.slot_duration_minutes,
        service_name=service_name,
        notes=notes,
    )
    _send_email_sync(to_email, subject, html)
