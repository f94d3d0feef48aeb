from src.service.ticketing.domain.value_object.cart_owner import CartOwner
from src.service.ticketing.domain.value_object.payment_log_entry import PaymentLogEntry
from src.service.ticketing.domain.value_object.ticket_verification_attempt import (
    TicketVerificationAttempt,
)

__all__ = ['CartOwner', 'PaymentLogEntry', 'TicketVerificationAttempt']
