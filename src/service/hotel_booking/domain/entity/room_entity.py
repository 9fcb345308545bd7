from typing import Optional

import attrs


@attrs.define(frozen=True)
class RoomSnapshot:
    """Display copy of room fields embedded in booking responses (not authoritative)."""

    hotel_name: str
    location: str
    price_per_night: int

    def to_dict(self) -> dict:
        return attrs.asdict(self)


@attrs.define
class Room:
    id: int
    hotel_name: str
    location: str
    price_per_night: int
    available: bool = True
    created_by: Optional[int] = None
    description: Optional[str] = None

    def snapshot(self) -> RoomSnapshot:
        return RoomSnapshot(
            hotel_name=self.hotel_name,
            location=self.location,
            price_per_night=self.price_per_night,
        )
