import logging
from datetime import date, datetime

from app.models.booking import (
    BookingSelection,
    BookingState,
    BookingStep,
    CompleteDetails,
    Confirmation,
    ContactDetails,
    SelectDateTime,
    Welcome,
)

logger = logging.getLogger(__name__)


class IllegalTransitionError(AssertionError):
    """Wizard operation called from a step that does not allow it."""

    def __init__(self, operation: str, step: BookingStep) -> None:
        super().__init__(f"Cannot {operation} from step '{step.value}'")
        self.operation = operation
        self.step = step


class BookingWizard:
    """
    Welcome -> SelectDateTime -> CompleteDetails -> Confirmation.

    The caller is trusted to pass a date allowed by DateAvailabilityPolicy and a
    slot flagged available for it; select_slot does not re-check either.
    """

    def __init__(self) -> None:
        self._state: BookingState = Welcome()

    @property
    def state(self) -> BookingState:
        return self._state

    @property
    def step(self) -> BookingStep:
        return self._state.step

    @property
    def selection(self) -> BookingSelection | None:
        if isinstance(self._state, (CompleteDetails, Confirmation)):
            return self._state.selection
        if isinstance(self._state, SelectDateTime):
            return self._state.previous_selection
        return None

    @property
    def contact_details(self) -> ContactDetails | None:
        if isinstance(self._state, Confirmation):
            return self._state.contact_details
        return None

    def _move(self, new_state: BookingState) -> None:
        logger.debug("Booking wizard: %s -> %s", self._state.step.value, new_state.step.value)
        self._state = new_state

    def _require(self, operation: str, *allowed: type) -> None:
        if not isinstance(self._state, allowed):
            raise IllegalTransitionError(operation, self._state.step)

    def start(self) -> None:
        self._require("start", Welcome)
        self._move(SelectDateTime())

    def select_slot(self, d: date, time: datetime) -> None:
        self._require("select a slot", SelectDateTime)
        if isinstance(d, datetime):
            d = d.date()
        self._move(CompleteDetails(selection=BookingSelection(date=d, time=time)))

    def back(self) -> None:
        self._require("go back", CompleteDetails)
        self._move(SelectDateTime(previous_selection=self._state.selection))

    def submit_details(self, details: ContactDetails) -> None:
        self._require("submit details", CompleteDetails)
        self._move(Confirmation(selection=self._state.selection, contact_details=details))

    def reset(self) -> None:
        self._move(Welcome())
