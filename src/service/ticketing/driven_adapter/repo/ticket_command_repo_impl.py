from typing import Optional
from uuid import UUID

from sqlalchemy import func, select, update
from uuid_utils.compat import uuid7

from src.platform.database.session_repo import SessionRepo
from src.platform.logging.loguru_io import Logger
from src.platform.types.utc_datetime import utc_now
from src.service.ticketing.app.interface.i_ticket_command_repo import ITicketCommandRepo
from src.service.ticketing.domain.entity.ticket_entity import Ticket
from src.service.ticketing.domain.enum.ticket_status import TicketStatus
from src.service.ticketing.domain.value_object.ticket_verification_attempt import (
    TicketVerificationAttempt,
)
from src.service.ticketing.driven_adapter.model.ticket_model import (
    TicketModel,
    TicketVerificationModel,
)
from src.service.ticketing.driven_adapter.repo.ticketing_mapper import ticket_to_entity


class TicketCommandRepoImpl(SessionRepo, ITicketCommandRepo):
    @Logger.io
    async def get_by_code(self, *, ticket_code: str) -> Optional[Ticket]:
        async with self._get_session() as session:
            result = await session.execute(
                select(TicketModel)
                .where(func.upper(TicketModel.ticket_code) == ticket_code.strip().upper())
                .execution_options(populate_existing=True)
            )
            model = result.scalar_one_or_none()
            return ticket_to_entity(model) if model else None

    @Logger.io
    async def claim_use(
        self, *, ticket_id: UUID, verified_by: str, device: Optional[str] = None
    ) -> bool:
        stmt = (
            update(TicketModel)
            .where(TicketModel.id == ticket_id, TicketModel.status == TicketStatus.VALID.value)
            .values(
                status=TicketStatus.USED.value,
                used_at=utc_now(),
                verified_by=verified_by,
                verification_device=device,
            )
            .execution_options(synchronize_session=False)
        )
        async with self._get_session() as session:
            result = await session.execute(stmt)
            return result.rowcount == 1  # type: ignore[attr-defined]

    @Logger.io
    async def cancel_for_booking(self, *, booking_id: UUID) -> int:
        stmt = (
            update(TicketModel)
            .where(
                TicketModel.booking_id == booking_id,
                TicketModel.status == TicketStatus.VALID.value,
            )
            .values(status=TicketStatus.CANCELLED.value)
            .execution_options(synchronize_session=False)
        )
        async with self._get_session() as session:
            result = await session.execute(stmt)
            return result.rowcount or 0  # type: ignore[attr-defined]

    @Logger.io
    async def log_verification(self, *, attempt: TicketVerificationAttempt) -> None:
        async with self._get_session() as session:
            session.add(
                TicketVerificationModel(
                    id=uuid7(),
                    ticket_id=attempt.ticket_id,
                    ticket_code=attempt.ticket_code,
                    result=attempt.result.value,
                    verified_by=attempt.verified_by,
                    device=attempt.device,
                    location=attempt.location,
                    created_at=utc_now(),
                )
            )
            await session.flush()
