from typing import Optional, Self

import attrs
from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.logging.loguru_io import Logger
from src.platform.types.utc_datetime import museum_today
from src.service.ticketing.domain.entity.booking_entity import Booking
from src.service.ticketing.domain.entity.ticket_entity import Ticket
from src.service.ticketing.domain.enum.booking_status import BookingStatus
from src.service.ticketing.domain.enum.ticket_status import TicketStatus
from src.service.ticketing.domain.enum.verification_result import EntryAction, VerificationResult
from src.service.ticketing.domain.value_object.ticket_verification_attempt import (
    TicketVerificationAttempt,
)


_MESSAGES = {
    VerificationResult.INVALID: 'Ticket not found',
    VerificationResult.ALREADY_USED: 'Ticket has already been used',
    VerificationResult.CANCELLED: 'Ticket has been cancelled',
    VerificationResult.WRONG_DATE: 'Ticket is not valid for today',
    VerificationResult.VALID_UNUSED: 'Entry granted',
}


@attrs.define(frozen=True)
class TicketVerificationOutcome:
    result: VerificationResult
    ticket: Optional[Ticket] = None
    booking: Optional[Booking] = None

    @property
    def action(self) -> EntryAction:
        if self.result == VerificationResult.VALID_UNUSED:
            return EntryAction.GRANT_ENTRY
        return EntryAction.DENY_ENTRY

    @property
    def message(self) -> str:
        return _MESSAGES[self.result]


class VerifyTicketUseCase:
    """
    Gate scan

    A valid, unused ticket for today's booking is marked used with a
    conditional update; of two concurrent scans only one gets GRANT_ENTRY.
    Every attempt, including unknown codes, is appended to ticket_verification.
    """

    def __init__(self, *, uow: AbstractUnitOfWork) -> None:
        self.uow = uow

    @classmethod
    @inject
    def depends(cls, uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work])) -> Self:
        return cls(uow=uow)

    @Logger.io
    async def execute(
        self,
        *,
        ticket_code: str,
        verified_by: str,
        device: Optional[str] = None,
        location: Optional[str] = None,
    ) -> TicketVerificationOutcome:
        async with self.uow:
            ticket = await self.uow.ticket_command_repo.get_by_code(ticket_code=ticket_code)
            booking = (
                await self.uow.booking_command_repo.get_by_id(booking_id=ticket.booking_id)
                if ticket
                else None
            )

            if ticket is None or booking is None:
                result = VerificationResult.INVALID
            elif ticket.status == TicketStatus.USED:
                result = VerificationResult.ALREADY_USED
            elif (
                ticket.status == TicketStatus.CANCELLED
                or booking.status == BookingStatus.CANCELLED
            ):
                result = VerificationResult.CANCELLED
            elif booking.booking_date != museum_today():
                result = VerificationResult.WRONG_DATE
            elif await self.uow.ticket_command_repo.claim_use(
                ticket_id=ticket.id, verified_by=verified_by, device=device
            ):
                result = VerificationResult.VALID_UNUSED
                ticket = await self.uow.ticket_command_repo.get_by_code(ticket_code=ticket_code)
            else:
                result = VerificationResult.ALREADY_USED

            await self.uow.ticket_command_repo.log_verification(
                attempt=TicketVerificationAttempt(
                    ticket_code=ticket_code,
                    result=result,
                    verified_by=verified_by,
                    ticket_id=ticket.id if ticket else None,
                    device=device,
                    location=location,
                )
            )
            await self.uow.commit()

        Logger.base.info(f'🎫 [VERIFY] {ticket_code} -> {result.value} by {verified_by}')
        return TicketVerificationOutcome(result=result, ticket=ticket, booking=booking)
