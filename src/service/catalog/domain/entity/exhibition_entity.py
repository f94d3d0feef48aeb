from datetime import date, datetime
from typing import Optional
from uuid import UUID

import attrs
from uuid_utils.compat import uuid7

from src.platform.exception.exceptions import DomainError
from src.platform.logging.loguru_io import Logger
from src.platform.types.utc_datetime import utc_now
from src.service.catalog.domain.enum.catalog_status import ExhibitionStatus


def _validate_date_range(start_date: Optional[date], end_date: Optional[date]) -> None:
    if start_date and end_date and end_date < start_date:
        raise DomainError('end_date cannot be before start_date')


@attrs.define
class Exhibition:
    name: str
    description: str = ''
    category: str = 'general'
    location: str = ''
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    image_url: Optional[str] = None
    status: ExhibitionStatus = ExhibitionStatus.DRAFT
    id: UUID = attrs.field(factory=uuid7)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    @Logger.io
    def create(
        cls,
        *,
        name: str,
        description: str = '',
        category: str = 'general',
        location: str = '',
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        image_url: Optional[str] = None,
        status: ExhibitionStatus = ExhibitionStatus.DRAFT,
    ) -> 'Exhibition':
        if not name or not name.strip():
            raise DomainError('Exhibition name is required')
        _validate_date_range(start_date, end_date)

        now = utc_now()
        return cls(
            name=name.strip(),
            description=description,
            category=category,
            location=location,
            start_date=start_date,
            end_date=end_date,
            image_url=image_url,
            status=status,
            created_at=now,
            updated_at=now,
        )

    def update(self, **changes) -> 'Exhibition':
        if 'name' in changes and (not changes['name'] or not changes['name'].strip()):
            raise DomainError('Exhibition name is required')
        if self.status == ExhibitionStatus.ARCHIVED and changes.get('status') is None:
            raise DomainError('Archived exhibitions cannot be edited')

        updated = attrs.evolve(self, **changes, updated_at=utc_now())
        _validate_date_range(updated.start_date, updated.end_date)
        return updated

    def archive(self) -> 'Exhibition':
        if self.status == ExhibitionStatus.ARCHIVED:
            raise DomainError('Exhibition already archived')
        return attrs.evolve(self, status=ExhibitionStatus.ARCHIVED, updated_at=utc_now())

    @property
    def is_bookable(self) -> bool:
        return self.status == ExhibitionStatus.ACTIVE
