from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from src.platform.database.orm_db_setting import Base


class PricingModel(Base):
    __tablename__ = 'pricing'

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True)
    exhibition_id: Mapped[Optional[UUID]] = mapped_column(
        Uuid, ForeignKey('exhibition.id'), nullable=True, index=True
    )
    show_id: Mapped[Optional[UUID]] = mapped_column(
        Uuid, ForeignKey('show.id'), nullable=True, index=True
    )
    ticket_type: Mapped[str] = mapped_column(String(20), nullable=False)
    price: Mapped[int] = mapped_column(Integer, nullable=False)  # minor units
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )
