from datetime import datetime
from typing import Optional
from uuid import UUID

import attrs
from uuid_utils.compat import uuid7

from src.platform.exception.exceptions import DomainError
from src.platform.types.utc_datetime import utc_now


def _positive_duration(instance: object, attribute: attrs.Attribute, value: int) -> None:
    if value <= 0:
        raise DomainError('duration_minutes must be positive')


@attrs.define
class Show:
    """Planetarium, film or live show with its own schedule and prices"""

    name: str
    description: str = ''
    show_type: str = 'planetarium'
    duration_minutes: int = attrs.field(default=60, validator=_positive_duration)
    image_url: Optional[str] = None
    is_active: bool = True
    id: UUID = attrs.field(factory=uuid7)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def create(
        cls,
        *,
        name: str,
        description: str = '',
        show_type: str = 'planetarium',
        duration_minutes: int = 60,
        image_url: Optional[str] = None,
        is_active: bool = True,
    ) -> 'Show':
        if not name or not name.strip():
            raise DomainError('Show name is required')

        now = utc_now()
        return cls(
            name=name.strip(),
            description=description,
            show_type=show_type,
            duration_minutes=duration_minutes,
            image_url=image_url,
            is_active=is_active,
            created_at=now,
            updated_at=now,
        )

    def update(self, **changes) -> 'Show':
        if 'name' in changes and (not changes['name'] or not changes['name'].strip()):
            raise DomainError('Show name is required')
        return attrs.evolve(self, **changes, updated_at=utc_now())

    def deactivate(self) -> 'Show':
        return attrs.evolve(self, is_active=False, updated_at=utc_now())
