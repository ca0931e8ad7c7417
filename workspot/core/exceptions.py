"""
Booking errors raised by the service layer and translated to HTTP by the routers.
"""


class BookingError(Exception):
    """Base class for reservations that cannot be made or changed."""


class HoursNotSetError(BookingError):
    """Raised when the business published no hours for the requested date."""


class InvalidBookingWindowError(BookingError):
    """Raised when the start hour or duration falls outside what is free."""


class SlotUnavailableError(BookingError):
    """Raised when the desk is already taken for part of the requested window."""


class OwnBusinessError(BookingError):
    """Raised when an owner tries to book a desk at their own business."""
