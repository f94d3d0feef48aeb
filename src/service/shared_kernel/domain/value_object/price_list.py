"""
Price List Value Object - Shared Kernel

Active per-ticket-type prices of one exhibition, show, or general admission.
Amounts are integers in minor currency units (paise).
"""

import attrs

from src.platform.exception.exceptions import DomainError
from src.service.shared_kernel.domain.enum.ticket_type import TicketType
from src.service.shared_kernel.domain.value_object.ticket_counts import TicketCounts


@attrs.define(frozen=True)
class PriceList:
    prices: dict[TicketType, int] = attrs.field(factory=dict)

    def price_of(self, ticket_type: TicketType) -> int:
        if ticket_type not in self.prices:
            raise DomainError(f'No active price for {ticket_type.value} tickets')
        return self.prices[ticket_type]

    def subtotal_for(self, counts: TicketCounts) -> int:
        return sum(self.price_of(ticket_type) * count for ticket_type, count in counts.items())
