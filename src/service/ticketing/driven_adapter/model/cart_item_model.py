from datetime import date, datetime
from typing import Optional
from uuid import UUID

from sqlalchemy import CheckConstraint, Date, DateTime, ForeignKey, Index, Integer, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from src.platform.database.orm_db_setting import Base


class CartItemModel(Base):
    __tablename__ = 'cart_item'
    __table_args__ = (
        CheckConstraint(
            '(user_id IS NOT NULL) OR (guest_cart_id IS NOT NULL)', name='has_owner'
        ),
        CheckConstraint('total_tickets > 0', name='total_tickets_positive'),
        Index('ix_cart_item_expiry', 'released_at', 'expires_at'),
    )

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True)
    user_id: Mapped[Optional[str]] = mapped_column(String(64), nullable=True, index=True)
    guest_cart_id: Mapped[Optional[str]] = mapped_column(String(20), nullable=True, index=True)
    time_slot_id: Mapped[UUID] = mapped_column(
        Uuid, ForeignKey('time_slot.id'), nullable=False, index=True
    )
    exhibition_id: Mapped[Optional[UUID]] = mapped_column(Uuid, nullable=True)
    show_id: Mapped[Optional[UUID]] = mapped_column(Uuid, nullable=True)
    item_name: Mapped[str] = mapped_column(String(255), nullable=False, default='')
    booking_date: Mapped[date] = mapped_column(Date, nullable=False)
    adult_tickets: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    child_tickets: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    student_tickets: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    senior_tickets: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    total_tickets: Mapped[int] = mapped_column(Integer, nullable=False)
    subtotal: Mapped[int] = mapped_column(Integer, nullable=False, default=0)  # minor units
    expires_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    released_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    payment_order_id: Mapped[Optional[UUID]] = mapped_column(
        Uuid, ForeignKey('payment_order.id'), nullable=True, index=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
