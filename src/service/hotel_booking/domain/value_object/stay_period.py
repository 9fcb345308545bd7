from datetime import datetime, timezone

import attrs

from src.platform.exception.exceptions import InvalidRangeError


def as_utc(value: datetime) -> datetime:
    """Naive datetimes are interpreted as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


@attrs.define(frozen=True)
class StayPeriod:
    """
    Half-open stay interval [check_in, check_out).

    Two periods conflict iff a.check_in < b.check_out and a.check_out > b.check_in,
    so a stay that starts on the day another one ends does not conflict.
    """

    check_in: datetime = attrs.field(converter=as_utc)
    check_out: datetime = attrs.field(converter=as_utc)

    @classmethod
    def create(cls, *, check_in: datetime, check_out: datetime) -> 'StayPeriod':
        period = cls(check_in=check_in, check_out=check_out)
        if period.check_out <= period.check_in:
            raise InvalidRangeError('Check-out date must be after check-in date')
        return period

    def overlaps(self, other: 'StayPeriod') -> bool:
        return self.check_in < other.check_out and self.check_out > other.check_in
