from enum import StrEnum


class BookingStatus(StrEnum):
    BOOKED = 'booked'
    CANCELLED = 'cancelled'
    COMPLETED = 'completed'  # Set by the checkout job, never by this service
