from datetime import datetime
from typing import Optional
from uuid import UUID

import attrs
from uuid_utils.compat import uuid7

from src.platform.exception.exceptions import DomainError
from src.platform.types.utc_datetime import utc_now
from src.service.shared_kernel.domain.enum.ticket_type import TicketType


@attrs.define
class Pricing:
    """
    Price of one ticket type for an exhibition, a show, or general admission

    Owner is exhibition_id, show_id, or neither (general admission).
    Amounts are minor currency units.
    """

    ticket_type: TicketType
    price: int
    exhibition_id: Optional[UUID] = None
    show_id: Optional[UUID] = None
    is_active: bool = True
    id: UUID = attrs.field(factory=uuid7)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def create(
        cls,
        *,
        ticket_type: TicketType,
        price: int,
        exhibition_id: Optional[UUID] = None,
        show_id: Optional[UUID] = None,
        is_active: bool = True,
    ) -> 'Pricing':
        if exhibition_id is not None and show_id is not None:
            raise DomainError('Pricing belongs to an exhibition or a show, not both')
        if price < 0:
            raise DomainError('Price cannot be negative')

        now = utc_now()
        return cls(
            ticket_type=ticket_type,
            price=price,
            exhibition_id=exhibition_id,
            show_id=show_id,
            is_active=is_active,
            created_at=now,
            updated_at=now,
        )

    def change_price(self, *, price: Optional[int], is_active: Optional[bool]) -> 'Pricing':
        if price is not None and price < 0:
            raise DomainError('Price cannot be negative')
        return attrs.evolve(
            self,
            price=self.price if price is None else price,
            is_active=self.is_active if is_active is None else is_active,
            updated_at=utc_now(),
        )
