"""
Database Models

Import all models here to ensure they are registered with SQLAlchemy
"""

from src.service.ticketing.driven_adapter.model.booking_model import BookingModel
from src.service.ticketing.driven_adapter.model.cart_item_model import CartItemModel
from src.service.ticketing.driven_adapter.model.payment_log_model import PaymentLogModel
from src.service.ticketing.driven_adapter.model.payment_order_model import PaymentOrderModel
from src.service.ticketing.driven_adapter.model.ticket_model import (
    TicketModel,
    TicketVerificationModel,
)
from src.service.ticketing.driven_adapter.model.user_profile_model import UserProfileModel

__all__ = [
    'BookingModel',
    'CartItemModel',
    'PaymentLogModel',
    'PaymentOrderModel',
    'TicketModel',
    'TicketVerificationModel',
    'UserProfileModel',
]
