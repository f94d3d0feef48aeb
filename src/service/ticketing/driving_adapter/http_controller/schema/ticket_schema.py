from typing import Optional

from pydantic import Field

from src.service.shared_kernel.driving_adapter.schema.camel_schema import CamelSchema
from src.service.ticketing.app.command.verify_ticket_use_case import TicketVerificationOutcome
from src.service.ticketing.driving_adapter.http_controller.schema.booking_schema import (
    BookingResponse,
)


class VerifyTicketRequest(CamelSchema):
    ticket_code: str = Field(min_length=1, max_length=64)
    device: Optional[str] = Field(default=None, max_length=100)
    location: Optional[str] = Field(default=None, max_length=100)


class VerifyTicketResponse(CamelSchema):
    result: str
    action: str
    message: str
    ticket_code: str
    booking: Optional[BookingResponse] = None

    @classmethod
    def from_value(
        cls, outcome: TicketVerificationOutcome, *, ticket_code: str
    ) -> 'VerifyTicketResponse':
        return cls(
            result=outcome.result.value,
            action=outcome.action.value,
            message=outcome.message,
            ticket_code=ticket_code,
            booking=BookingResponse.from_entity(outcome.booking) if outcome.booking else None,
        )
