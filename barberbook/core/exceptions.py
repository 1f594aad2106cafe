"""
Booking errors.

Raised in the services layer and turned into JSON responses by the exception
handler installed in ``barberbook.main``. Everything except
``PersistenceFailure`` is an expected business outcome that the caller shows
to the customer as-is.
"""
from typing import Any, Dict, Optional


class BookingError(Exception):
    """Base class for every error the booking core reports to a caller."""
    code = "BOOKING_ERROR"
    status_code = 400

    def __init__(self, message: str, **details: Any):
        super().__init__(message)
        self.message = message
        self.details: Dict[str, Any] = details

    def to_dict(self) -> Dict[str, Any]:
        body = {"detail": self.message, "code": self.code}
        body.update(self.details)
        return body


class NonWorkingDay(BookingError):
    code = "NON_WORKING_DAY"

    def __init__(self, date: str):
        super().__init__(f"{date} is not a working day", date=date)


class CapacityExceeded(BookingError):
    code = "CAPACITY_EXCEEDED"
    status_code = 409

    def __init__(self, provider_id: str, date: str, max_per_day: int):
        super().__init__(
            f"No more bookings available for this provider on {date} (limit {max_per_day})",
            providerId=provider_id,
            date=date,
        )


class SlotTaken(BookingError):
    code = "SLOT_TAKEN"
    status_code = 409

    def __init__(self, date: str, time_slot: str):
        super().__init__(
            f"The {time_slot} slot on {date} has already been booked",
            date=date,
            timeSlot=time_slot,
        )


class SlotInPast(BookingError):
    code = "SLOT_IN_PAST"

    def __init__(self, date: str, time_slot: str):
        super().__init__(
            f"{date} {time_slot} is in the past",
            date=date,
            timeSlot=time_slot,
        )


class OutsideBusinessHours(BookingError):
    code = "OUTSIDE_BUSINESS_HOURS"

    def __init__(self, time_slot: str):
        super().__init__(
            f"{time_slot} is not one of the bookable time slots",
            timeSlot=time_slot,
        )


class InvalidTransition(BookingError):
    code = "INVALID_TRANSITION"
    status_code = 409

    def __init__(self, booking_id: str, current: str, target: str):
        super().__init__(
            f"Booking is {current} and cannot be moved to {target}",
            bookingId=booking_id,
            currentStatus=current,
        )


class NotCheckable(BookingError):
    code = "NOT_CHECKABLE"
    status_code = 409

    def __init__(self, booking_id: str, current: str):
        super().__init__(
            f"This booking is {current} and cannot be checked in",
            bookingId=booking_id,
            currentStatus=current,
        )


class OutOfOrder(BookingError):
    code = "OUT_OF_ORDER"
    status_code = 409

    def __init__(self, booking_id: str, waiting_count: int, earliest_time: str):
        super().__init__(
            f"{waiting_count} earlier booking(s) still waiting (from {earliest_time}), please wait your turn",
            bookingId=booking_id,
            waitingCount=waiting_count,
            earliestTime=earliest_time,
        )
        self.waiting_count = waiting_count
        self.earliest_time = earliest_time


class UnrecognizedCode(BookingError):
    code = "UNRECOGNIZED_CODE"
    status_code = 404

    def __init__(self, token: str):
        super().__init__("Scanned code does not match any booking", token=token)


class BookingNotFound(BookingError):
    code = "BOOKING_NOT_FOUND"
    status_code = 404

    def __init__(self, booking_id: str):
        super().__init__("Booking not found", bookingId=booking_id)


class ProviderNotFound(BookingError):
    code = "PROVIDER_NOT_FOUND"
    status_code = 404

    def __init__(self, provider_id: str):
        super().__init__("Provider not found", providerId=provider_id)


class InvalidSettings(BookingError):
    code = "INVALID_SETTINGS"

    def __init__(self, message: str):
        super().__init__(message)


class PersistenceFailure(BookingError):
    code = "PERSISTENCE_FAILURE"
    status_code = 503

    def __init__(self, operation: str, cause: Optional[BaseException] = None):
        super().__init__(
            f"The operation did not complete ({operation}), please try again",
            operation=operation,
        )
        self.cause = cause


class ConstraintViolation(Exception):
    """A storage-level uniqueness or compare-and-set guard rejected a write."""
    pass


class MissingCustomerDetails(BookingError):
    code = "MISSING_CUSTOMER_DETAILS"

    def __init__(self):
        super().__init__("Customer name and phone are required")
