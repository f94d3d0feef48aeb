from src.service.ticketing.domain.enum.booking_status import BookingStatus, PaymentStatus
from src.service.ticketing.domain.enum.payment_order_status import PaymentOrderStatus
from src.service.ticketing.domain.enum.ticket_status import TicketStatus
from src.service.ticketing.domain.enum.user_role import UserRole
from src.service.ticketing.domain.enum.verification_result import EntryAction, VerificationResult


__all__ = [
    'BookingStatus',
    'EntryAction',
    'PaymentOrderStatus',
    'PaymentStatus',
    'TicketStatus',
    'UserRole',
    'VerificationResult',
]
