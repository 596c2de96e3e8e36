from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from pydantic import ValidationError

from app.models.booking import ContactDetails

FIELD_MESSAGES = {
    "name": "Name is required",
    "email": "Invalid email address",
    "phone": "Invalid phone number",
    "service": "Select a service",
    "notes": "Invalid notes",
}


@dataclass(frozen=True)
class ValidationResult:
    details: ContactDetails | None = None
    errors: dict[str, str] = field(default_factory=dict)

    @property
    def is_valid(self) -> bool:
        return self.details is not None


def validate_contact_details(data: Mapping[str, Any]) -> ValidationResult:
    """Validate the whole contact form at once; never raises for bad input.

    Only non-emptiness of `service` is checked, not catalog membership.
    """
    try:
        details = ContactDetails.model_validate(dict(data))
    except ValidationError as e:
        errors: dict[str, str] = {}
        for err in e.errors():
            name = str(err["loc"][0]) if err["loc"] else "__root__"
            errors.setdefault(name, FIELD_MESSAGES.get(name, err["msg"]))
        return ValidationResult(errors=errors)
    return ValidationResult(details=details)
