from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from src.service.ticketing.domain.entity.ticket_entity import Ticket
from src.service.ticketing.domain.value_object.ticket_verification_attempt import (
    TicketVerificationAttempt,
)


class ITicketCommandRepo(ABC):
    @abstractmethod
    async def get_by_code(self, *, ticket_code: str) -> Optional[Ticket]:
        pass

    @abstractmethod
    async def claim_use(
        self, *, ticket_id: UUID, verified_by: str, device: Optional[str] = None
    ) -> bool:
        """status valid -> used. False when another scan got there first."""
        pass

    @abstractmethod
    async def cancel_for_booking(self, *, booking_id: UUID) -> int:
        pass

    @abstractmethod
    async def log_verification(self, *, attempt: TicketVerificationAttempt) -> None:
        pass
