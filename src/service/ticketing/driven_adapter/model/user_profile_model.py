from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, String, func
from sqlalchemy.orm import Mapped, mapped_column

from src.platform.database.orm_db_setting import Base


class UserProfileModel(Base):
    __tablename__ = 'user_profile'

    id: Mapped[str] = mapped_column(String(64), primary_key=True)  # token subject
    email: Mapped[str] = mapped_column(String(255), nullable=False, default='', index=True)
    full_name: Mapped[str] = mapped_column(String(255), nullable=False, default='')
    phone: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)
    role: Mapped[str] = mapped_column(String(20), default='visitor', nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    def __repr__(self):
        return f'<UserProfileModel(id={self.id}, email={self.email}, role={self.role})>'
