"""Shared Kernel Enums"""

from src.service.shared_kernel.domain.enum.ticket_type import TicketType

__all__ = ['TicketType']
