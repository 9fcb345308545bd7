from datetime import datetime
from typing import Dict, Generic, List, Literal, Optional, TypeVar

from pydantic import BaseModel

from src.platform.types import UtilsUUID7


T = TypeVar('T')


class BookingCreateRequest(BaseModel):
    # Optional so that missing fields surface as a domain validation error
    room_id: Optional[int] = None
    check_in: Optional[datetime] = None
    check_out: Optional[datetime] = None

    model_config = {
        'json_schema_extra': {
            'examples': [
                {
                    'room_id': 1,
                    'check_in': '2025-01-10T14:00:00Z',
                    'check_out': '2025-01-13T11:00:00Z',
                }
            ]
        }
    }


class RoomSnapshotResponse(BaseModel):
    hotel_name: str
    location: str
    price_per_night: int


class UserSummaryResponse(BaseModel):
    name: str
    email: str


class BookingResponse(BaseModel):
    model_config = {
        'json_schema_extra': {
            'example': {
                'id': '01936d8f-5e73-7c4e-a9c5-123456789abc',  # UUID7
                'user_id': 2,
                'room_id': 1,
                'check_in': '2025-01-10T14:00:00+00:00',
                'check_out': '2025-01-13T11:00:00+00:00',
                'total_price': 300,
                'number_of_nights': 3,
                'status': 'booked',
                'created_at': '2025-01-01T10:30:00+00:00',
                'updated_at': '2025-01-01T10:30:00+00:00',
                'room': {'hotel_name': 'Seaside Inn', 'location': 'Lisbon', 'price_per_night': 100},
            }
        },
    }

    id: UtilsUUID7  # UUID7
    user_id: int
    room_id: int
    check_in: datetime
    check_out: datetime
    total_price: int
    number_of_nights: int
    status: Literal['booked', 'cancelled', 'completed']
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    room: Optional[RoomSnapshotResponse] = None
    user: Optional[UserSummaryResponse] = None


class BookingListResponse(BaseModel):
    bookings: List[BookingResponse]
    count: int
    source: Literal['cache', 'database']


class AvailabilityResponse(BaseModel):
    available: bool
    conflict_dates: Optional[Dict[str, datetime]] = None


class OperationResponse(BaseModel, Generic[T]):
    """Envelope shared by every booking endpoint (errors come from the exception handlers)"""

    success: bool
    data: Optional[T] = None
