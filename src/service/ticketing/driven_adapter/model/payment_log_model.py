from datetime import datetime
from typing import Any, Optional
from uuid import UUID

from sqlalchemy import DateTime, Integer, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from src.platform.database.orm_db_setting import Base
from src.service.ticketing.driven_adapter.model.payment_order_model import JsonDocument


class PaymentLogModel(Base):
    __tablename__ = 'payment_log'

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True)
    # No FK: webhook events may arrive for orders this service never stored
    payment_order_id: Mapped[Optional[UUID]] = mapped_column(Uuid, nullable=True, index=True)
    gateway_order_id: Mapped[Optional[str]] = mapped_column(String(64), nullable=True, index=True)
    gateway_payment_id: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    event: Mapped[str] = mapped_column(String(64), nullable=False)
    status: Mapped[str] = mapped_column(String(32), nullable=False)
    amount: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    payload: Mapped[dict[str, Any]] = mapped_column(JsonDocument, nullable=False, default=dict)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
