"""Error kinds raised by the booking ledger.

Every error carries a machine-readable ``kind`` so the API layer can pick
an HTTP status from a lookup table instead of inspecting messages.
"""

from __future__ import annotations


class LedgerError(Exception):
    """Base class for booking ledger failures."""

    kind = "ledger_error"
    default_message = "Booking operation failed"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ScheduleNotFound(LedgerError):
    """Schedule does not exist or is not open for booking."""

    kind = "not_found"
    default_message = "Class schedule not found or not available"


class BookingNotFound(LedgerError):
    """Booking does not exist, belongs to someone else, or is already cancelled."""

    kind = "not_found"
    default_message = "Booking not found or already cancelled"


class ClassFull(LedgerError):
    kind = "full"
    default_message = "Class is full"


class AlreadyBooked(LedgerError):
    kind = "already_booked"
    default_message = "You have already booked this class"


class PastClass(LedgerError):
    kind = "past_class"
    default_message = "Cannot cancel past classes"


class StoreError(LedgerError):
    """The database failed mid-operation; the transaction was rolled back."""

    kind = "store_error"
    default_message = "Booking could not be saved, please try again"
