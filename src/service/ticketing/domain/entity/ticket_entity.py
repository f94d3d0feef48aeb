from datetime import datetime
import secrets
from typing import Optional
from uuid import UUID

import attrs
from uuid_utils.compat import uuid7

from src.platform.types.utc_datetime import utc_now
from src.service.ticketing.domain.enum.ticket_status import TicketStatus


def new_ticket_code() -> str:
    return f'TKT-{secrets.token_hex(6).upper()}'


@attrs.define
class Ticket:
    booking_id: UUID
    ticket_code: str
    status: TicketStatus = TicketStatus.VALID
    used_at: Optional[datetime] = None
    verified_by: Optional[str] = None
    verification_device: Optional[str] = None
    id: UUID = attrs.field(factory=uuid7)
    created_at: Optional[datetime] = None

    @classmethod
    def create(cls, *, booking_id: UUID) -> 'Ticket':
        return cls(booking_id=booking_id, ticket_code=new_ticket_code(), created_at=utc_now())

    @property
    def is_used(self) -> bool:
        return self.status == TicketStatus.USED
