from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlalchemy import DateTime, ForeignKey, Integer, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from src.platform.database.orm_db_setting import Base


class CapacityLogModel(Base):
    __tablename__ = 'capacity_log'

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True)
    time_slot_id: Mapped[UUID] = mapped_column(
        Uuid, ForeignKey('time_slot.id'), nullable=False, index=True
    )
    action: Mapped[str] = mapped_column(String(50), nullable=False, default='capacity_adjusted')
    previous_capacity: Mapped[int] = mapped_column(Integer, nullable=False)
    new_capacity: Mapped[int] = mapped_column(Integer, nullable=False)
    changed_by: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    reason: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
