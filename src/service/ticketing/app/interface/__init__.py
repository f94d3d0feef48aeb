"""Application layer interfaces (Ports)"""

from src.service.ticketing.app.interface.i_booking_command_repo import IBookingCommandRepo
from src.service.ticketing.app.interface.i_booking_query_repo import (
    BookingFilters,
    IBookingQueryRepo,
)
from src.service.ticketing.app.interface.i_cart_item_command_repo import ICartItemCommandRepo
from src.service.ticketing.app.interface.i_payment_gateway import IPaymentGateway
from src.service.ticketing.app.interface.i_payment_log_repo import IPaymentLogRepo
from src.service.ticketing.app.interface.i_payment_order_command_repo import (
    IPaymentOrderCommandRepo,
)
from src.service.ticketing.app.interface.i_ticket_command_repo import ITicketCommandRepo
from src.service.ticketing.app.interface.i_user_profile_repo import IUserProfileRepo

__all__ = [
    'BookingFilters',
    'IBookingCommandRepo',
    'IBookingQueryRepo',
    'ICartItemCommandRepo',
    'IPaymentGateway',
    'IPaymentLogRepo',
    'IPaymentOrderCommandRepo',
    'ITicketCommandRepo',
    'IUserProfileRepo',
]
