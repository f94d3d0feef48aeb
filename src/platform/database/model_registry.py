"""
Importing this module registers every ORM model on Base.metadata.

Used by create_db_and_tables and by the alembic env.
"""

from src.service.catalog.driven_adapter.model import ExhibitionModel, PricingModel, ShowModel
from src.service.inventory.driven_adapter.model import CapacityLogModel, TimeSlotModel
from src.service.ticketing.driven_adapter.model import (
    BookingModel,
    CartItemModel,
    PaymentLogModel,
    PaymentOrderModel,
    TicketModel,
    TicketVerificationModel,
    UserProfileModel,
)

__all__ = [
    'BookingModel',
    'CapacityLogModel',
    'CartItemModel',
    'ExhibitionModel',
    'PaymentLogModel',
    'PaymentOrderModel',
    'PricingModel',
    'ShowModel',
    'TicketModel',
    'TicketVerificationModel',
    'TimeSlotModel',
    'UserProfileModel',
]
