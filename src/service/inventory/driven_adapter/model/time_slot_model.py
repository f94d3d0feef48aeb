from datetime import date, datetime, time
from typing import Optional
from uuid import UUID

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Date,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    SmallInteger,
    String,
    Time,
    Uuid,
)
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from src.platform.database.orm_db_setting import Base


class TimeSlotModel(Base):
    __tablename__ = 'time_slot'
    __table_args__ = (
        CheckConstraint('current_bookings >= 0', name='current_bookings_non_negative'),
        CheckConstraint('current_bookings <= capacity', name='current_bookings_within_capacity'),
        CheckConstraint('capacity BETWEEN 1 AND 500', name='capacity_range'),
        Index('ix_time_slot_owner_date', 'exhibition_id', 'show_id', 'slot_date'),
    )

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True)
    exhibition_id: Mapped[Optional[UUID]] = mapped_column(
        Uuid, ForeignKey('exhibition.id'), nullable=True
    )
    show_id: Mapped[Optional[UUID]] = mapped_column(Uuid, ForeignKey('show.id'), nullable=True)
    slot_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    day_of_week: Mapped[Optional[int]] = mapped_column(SmallInteger, nullable=True)
    start_time: Mapped[time] = mapped_column(Time, nullable=False)
    end_time: Mapped[time] = mapped_column(Time, nullable=False)
    capacity: Mapped[int] = mapped_column(Integer, nullable=False)
    current_bookings: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    buffer_capacity: Mapped[int] = mapped_column(Integer, nullable=False, default=5)
    slot_type: Mapped[str] = mapped_column(String(20), nullable=False, default='general')
    notes: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )
