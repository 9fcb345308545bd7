from typing import List, Literal

import attrs


BookingListSource = Literal['cache', 'database']


@attrs.define(frozen=True)
class BookingListResult:
    """
    Booking list as served by the read-through cache.

    items are JSON-ready dicts so the same payload can be cached and returned.
    """

    items: List[dict]
    source: BookingListSource

    def to_dict(self) -> dict:
        return {'bookings': self.items, 'count': len(self.items), 'source': self.source}
