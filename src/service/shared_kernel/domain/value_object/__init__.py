"""Shared Kernel Value Objects"""

from src.service.shared_kernel.domain.value_object.price_list import PriceList
from src.service.shared_kernel.domain.value_object.ticket_counts import TicketCounts

__all__ = ['PriceList', 'TicketCounts']
