from datetime import datetime
from typing import Any, Optional
from uuid import UUID

from sqlalchemy import JSON, DateTime, Integer, String, Uuid
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from src.platform.database.orm_db_setting import Base


JsonDocument = JSON().with_variant(JSONB(), 'postgresql')


class PaymentOrderModel(Base):
    __tablename__ = 'payment_order'

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True)
    gateway_order_id: Mapped[Optional[str]] = mapped_column(
        String(64), unique=True, nullable=True
    )
    user_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    amount: Mapped[int] = mapped_column(Integer, nullable=False)  # minor units
    currency: Mapped[str] = mapped_column(String(3), nullable=False, default='INR')
    receipt: Mapped[str] = mapped_column(String(40), nullable=False)
    visitor_name: Mapped[str] = mapped_column(String(255), nullable=False, default='')
    visitor_email: Mapped[str] = mapped_column(String(255), nullable=False, default='')
    visitor_phone: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)
    cart_snapshot: Mapped[list[dict[str, Any]]] = mapped_column(JsonDocument, nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default='created', index=True)
    gateway_payment_id: Mapped[Optional[str]] = mapped_column(
        String(64), nullable=True, index=True
    )
    paid_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )
