from src.service.ticketing.domain.entity.booking_entity import Booking
from src.service.ticketing.domain.entity.cart_item_entity import CartItem
from src.service.ticketing.domain.entity.payment_order_entity import PaymentOrder, SnapshotLine
from src.service.ticketing.domain.entity.ticket_entity import Ticket
from src.service.ticketing.domain.entity.user_profile_entity import UserProfile

__all__ = ['Booking', 'CartItem', 'PaymentOrder', 'SnapshotLine', 'Ticket', 'UserProfile']
