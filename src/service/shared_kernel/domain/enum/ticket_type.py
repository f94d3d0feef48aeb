"""Ticket Type Enum"""

from enum import StrEnum


class TicketType(StrEnum):
    ADULT = 'adult'
    CHILD = 'child'
    STUDENT = 'student'
    SENIOR = 'senior'
