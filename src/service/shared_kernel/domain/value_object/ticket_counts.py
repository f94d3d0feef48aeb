"""
Ticket Counts Value Object - Shared Kernel

Per-visitor-category ticket counts carried by cart items, cart snapshot lines
and bookings. The total is what a time slot's capacity counter is charged.
"""

from typing import Any

import attrs

from src.platform.exception.exceptions import DomainError
from src.service.shared_kernel.domain.enum.ticket_type import TicketType


MAX_TICKETS_PER_LINE = 50


def _non_negative(instance: Any, attribute: attrs.Attribute, value: int) -> None:
    if value < 0:
        raise DomainError(f'{attribute.name} cannot be negative')


@attrs.define(frozen=True)
class TicketCounts:
    adult: int = attrs.field(default=0, validator=_non_negative)
    child: int = attrs.field(default=0, validator=_non_negative)
    student: int = attrs.field(default=0, validator=_non_negative)
    senior: int = attrs.field(default=0, validator=_non_negative)

    @property
    def total(self) -> int:
        return self.adult + self.child + self.student + self.senior

    def count_for(self, ticket_type: TicketType) -> int:
        return getattr(self, ticket_type.value)

    def items(self) -> list[tuple[TicketType, int]]:
        """Ticket types with a non-zero count"""
        return [(t, self.count_for(t)) for t in TicketType if self.count_for(t) > 0]

    def validate_bookable(self) -> None:
        if self.total < 1:
            raise DomainError('At least one ticket is required')
        if self.total > MAX_TICKETS_PER_LINE:
            raise DomainError(f'At most {MAX_TICKETS_PER_LINE} tickets per booking')

    def to_dict(self) -> dict[str, int]:
        return {t.value: self.count_for(t) for t in TicketType}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> 'TicketCounts':
        return cls(**{t.value: int(data.get(t.value) or 0) for t in TicketType})
