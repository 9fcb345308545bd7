from abc import ABC, abstractmethod
from typing import Optional

from src.service.hotel_booking.domain.entity.room_entity import Room


class IRoomRepo(ABC):
    """Read access to rooms (room records are managed outside this service)"""

    @abstractmethod
    async def get_by_id(self, *, room_id: int) -> Optional[Room]:
        pass

    @abstractmethod
    async def get_for_update(self, *, room_id: int) -> Optional[Room]:
        """
        Load room and lock its row until the surrounding transaction ends

        Concurrent creates for the same room queue up here, so the overlap check
        and the insert that follows run one at a time per room.
        """
        pass
