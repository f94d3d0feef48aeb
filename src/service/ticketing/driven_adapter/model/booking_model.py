from datetime import date, datetime
from typing import Optional
from uuid import UUID

from sqlalchemy import (
    Boolean,
    Date,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    UniqueConstraint,
    Uuid,
)
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from src.platform.database.orm_db_setting import Base


class BookingModel(Base):
    __tablename__ = 'booking'
    __table_args__ = (
        UniqueConstraint('payment_order_id', 'snapshot_line', name='uq_booking_order_line'),
        Index('ix_booking_slot_status', 'time_slot_id', 'status'),
    )

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True)
    booking_reference: Mapped[str] = mapped_column(String(20), unique=True, nullable=False)
    payment_order_id: Mapped[Optional[UUID]] = mapped_column(
        Uuid, ForeignKey('payment_order.id'), nullable=True
    )
    snapshot_line: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    user_id: Mapped[Optional[str]] = mapped_column(String(64), nullable=True, index=True)
    visitor_name: Mapped[str] = mapped_column(String(255), nullable=False)
    visitor_email: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    visitor_phone: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)
    time_slot_id: Mapped[UUID] = mapped_column(Uuid, ForeignKey('time_slot.id'), nullable=False)
    exhibition_id: Mapped[Optional[UUID]] = mapped_column(Uuid, nullable=True, index=True)
    show_id: Mapped[Optional[UUID]] = mapped_column(Uuid, nullable=True)
    item_name: Mapped[str] = mapped_column(String(255), nullable=False, default='')
    booking_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    adult_tickets: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    child_tickets: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    student_tickets: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    senior_tickets: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    total_tickets: Mapped[int] = mapped_column(Integer, nullable=False)
    total_amount: Mapped[int] = mapped_column(Integer, nullable=False)  # minor units
    status: Mapped[str] = mapped_column(String(20), nullable=False, default='confirmed')
    payment_status: Mapped[str] = mapped_column(String(20), nullable=False, default='pending')
    gateway_payment_id: Mapped[Optional[str]] = mapped_column(
        String(64), nullable=True, index=True
    )
    capacity_released: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    refund_id: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    refund_amount: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    refunded_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    cancelled_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )

    def __repr__(self):
        return f'<BookingModel(reference={self.booking_reference}, status={self.status})>'
