from enum import StrEnum


class SlotType(StrEnum):
    GENERAL = 'general'
    EXHIBITION = 'exhibition'
    EVENT = 'event'
