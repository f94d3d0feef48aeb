from enum import StrEnum


class ExhibitionStatus(StrEnum):
    DRAFT = 'draft'
    ACTIVE = 'active'
    ARCHIVED = 'archived'
