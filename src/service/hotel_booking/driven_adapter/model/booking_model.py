from datetime import datetime
from typing import TYPE_CHECKING
import uuid

from sqlalchemy import CheckConstraint, DateTime, Index, Integer, String, func, text
from sqlalchemy.dialects.postgresql import UUID as PG_UUID, ExcludeConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.platform.database.db_setting import Base


if TYPE_CHECKING:
    from src.service.hotel_booking.driven_adapter.model.room_model import RoomModel
    from src.service.hotel_booking.driven_adapter.model.user_model import UserModel


class BookingModel(Base):
    __tablename__ = 'booking'
    __table_args__ = (
        CheckConstraint('check_out > check_in', name='ck_booking_check_out_after_check_in'),
        CheckConstraint('total_price >= 0', name='ck_booking_total_price_non_negative'),
        Index('ix_booking_user_id_created_at', 'user_id', 'created_at'),
        Index('ix_booking_room_id_status', 'room_id', 'status'),
    )

    id: Mapped[uuid.UUID] = mapped_column(PG_UUID(as_uuid=True), primary_key=True)  # UUID7
    user_id: Mapped[int] = mapped_column(Integer, nullable=False)
    room_id: Mapped[int] = mapped_column(Integer, nullable=False)
    check_in: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    check_out: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    total_price: Mapped[int] = mapped_column(Integer, nullable=False)
    number_of_nights: Mapped[int] = mapped_column(Integer, nullable=False)
    status: Mapped[str] = mapped_column(String(20), default='booked', nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False, index=True
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )

    user: Mapped['UserModel'] = relationship(
        'UserModel',
        primaryjoin='foreign(BookingModel.user_id) == UserModel.id',
        viewonly=True,
        lazy='selectin',
    )
    room: Mapped['RoomModel'] = relationship(
        'RoomModel',
        primaryjoin='foreign(BookingModel.room_id) == RoomModel.id',
        viewonly=True,
        lazy='selectin',
    )


# Active bookings of one room may not overlap: [check_in, check_out) ranges, needs btree_gist
BOOKING_NO_OVERLAP_CONSTRAINT = 'ex_booking_room_active_overlap'

BookingModel.__table__.append_constraint(
    ExcludeConstraint(
        (BookingModel.__table__.c.room_id, '='),
        (
            func.tstzrange(
                BookingModel.__table__.c.check_in, BookingModel.__table__.c.check_out, text("'[)'")
            ),
            '&&',
        ),
        name=BOOKING_NO_OVERLAP_CONSTRAINT,
        using='gist',
        where=text("status = 'booked'"),
    )
)
