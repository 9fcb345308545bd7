from datetime import datetime
from typing import Any, Optional

from fastapi import APIRouter, Depends, Query, status
from opentelemetry import trace

from src.platform.logging.loguru_io import Logger
from src.platform.types import OperationResult
from src.service.hotel_booking.app.command.cancel_booking_use_case import CancelBookingUseCase
from src.service.hotel_booking.app.command.create_booking_use_case import CreateBookingUseCase
from src.service.hotel_booking.app.query.check_availability_use_case import (
    CheckAvailabilityUseCase,
)
from src.service.hotel_booking.app.query.get_booking_use_case import GetBookingUseCase
from src.service.hotel_booking.app.query.list_bookings_use_case import ListBookingsUseCase
from src.service.hotel_booking.domain.entity.user_entity import AuthenticatedUser
from src.service.hotel_booking.driving_adapter.http_controller.auth.role_auth import (
    get_current_user,
    require_admin,
)
from src.service.hotel_booking.driving_adapter.http_controller.schema.booking_schema import (
    AvailabilityResponse,
    BookingCreateRequest,
    BookingListResponse,
    BookingResponse,
    OperationResponse,
)


router = APIRouter()
tracer = trace.get_tracer(__name__)


@router.post(
    '',
    status_code=status.HTTP_201_CREATED,
    response_model=OperationResponse[BookingResponse],
)
@Logger.io
async def create_booking(
    request: BookingCreateRequest,
    current_user: AuthenticatedUser = Depends(get_current_user),
    use_case: CreateBookingUseCase = Depends(CreateBookingUseCase.depends),
) -> dict[str, Any]:
    with tracer.start_as_current_span('controller.create_booking') as span:
        span.set_attribute('user_id', current_user.id)
        if request.room_id is not None:
            span.set_attribute('room_id', request.room_id)

        view = await use_case.create_booking(
            user_id=current_user.id,
            room_id=request.room_id,
            check_in=request.check_in,
            check_out=request.check_out,
        )
        return OperationResult.ok(view.to_dict()).to_dict()


@router.get('/my-bookings', response_model=OperationResponse[BookingListResponse])
@Logger.io
async def list_my_bookings(
    current_user: AuthenticatedUser = Depends(get_current_user),
    use_case: ListBookingsUseCase = Depends(ListBookingsUseCase.depends),
) -> dict[str, Any]:
    result = await use_case.list_for_user(user_id=current_user.id)
    return OperationResult.ok(result.to_dict()).to_dict()


@router.get('/admin/all', response_model=OperationResponse[BookingListResponse])
@Logger.io
async def list_all_bookings(
    current_user: AuthenticatedUser = Depends(require_admin),
    use_case: ListBookingsUseCase = Depends(ListBookingsUseCase.depends),
) -> dict[str, Any]:
    result = await use_case.list_all()
    return OperationResult.ok(result.to_dict()).to_dict()


@router.get('/availability', response_model=OperationResponse[AvailabilityResponse])
@Logger.io
async def check_availability(
    room_id: Optional[int] = Query(None),
    check_in: Optional[datetime] = Query(None),
    check_out: Optional[datetime] = Query(None),
    current_user: AuthenticatedUser = Depends(get_current_user),
    use_case: CheckAvailabilityUseCase = Depends(CheckAvailabilityUseCase.depends),
) -> dict[str, Any]:
    result = await use_case.check_availability(
        room_id=room_id, check_in=check_in, check_out=check_out
    )
    return OperationResult.ok(result.to_dict()).to_dict()


@router.get('/{booking_id}', response_model=OperationResponse[BookingResponse])
@Logger.io
async def get_booking(
    booking_id: str,
    current_user: AuthenticatedUser = Depends(get_current_user),
    use_case: GetBookingUseCase = Depends(GetBookingUseCase.depends),
) -> dict[str, Any]:
    booking = await use_case.get_booking_with_details(booking_id=booking_id, user_id=current_user.id)
    return OperationResult.ok(booking).to_dict()


@router.put('/{booking_id}/cancel', response_model=OperationResponse[BookingResponse])
@Logger.io
async def cancel_booking(
    booking_id: str,
    current_user: AuthenticatedUser = Depends(get_current_user),
    use_case: CancelBookingUseCase = Depends(CancelBookingUseCase.depends),
) -> dict[str, Any]:
    with tracer.start_as_current_span('controller.cancel_booking') as span:
        span.set_attribute('booking_id', booking_id)
        view = await use_case.cancel_booking(booking_id=booking_id, user_id=current_user.id)
        return OperationResult.ok(view.to_dict()).to_dict()
