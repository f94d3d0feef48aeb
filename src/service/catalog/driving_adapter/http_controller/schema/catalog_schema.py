from datetime import date, datetime
from typing import Optional
from uuid import UUID

from pydantic import ConfigDict, Field

from src.service.catalog.domain.entity.exhibition_entity import Exhibition
from src.service.catalog.domain.entity.pricing_entity import Pricing
from src.service.catalog.domain.entity.show_entity import Show
from src.service.catalog.domain.enum.catalog_status import ExhibitionStatus
from src.service.shared_kernel.domain.enum.ticket_type import TicketType
from src.service.shared_kernel.driving_adapter.schema.camel_schema import CamelSchema


# ============================ Exhibitions ============================


class ExhibitionCreateRequest(CamelSchema):
    name: str = Field(min_length=1, max_length=200)
    description: str = ''
    category: str = 'general'
    location: str = ''
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    image_url: Optional[str] = None
    status: ExhibitionStatus = ExhibitionStatus.DRAFT

    model_config = ConfigDict(
        json_schema_extra={
            'example': {
                'name': 'Ancient Scripts',
                'description': 'Writing systems of the subcontinent',
                'category': 'history',
                'location': 'Gallery 2',
                'startDate': '2026-01-01',
                'endDate': '2026-06-30',
                'status': 'active',
            }
        }
    )


class ExhibitionUpdateRequest(CamelSchema):
    name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    description: Optional[str] = None
    category: Optional[str] = None
    location: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    image_url: Optional[str] = None
    status: Optional[ExhibitionStatus] = None


class ExhibitionResponse(CamelSchema):
    id: UUID
    name: str
    description: str
    category: str
    location: str
    start_date: Optional[date]
    end_date: Optional[date]
    image_url: Optional[str]
    status: str
    created_at: Optional[datetime]

    @classmethod
    def from_entity(cls, exhibition: Exhibition) -> 'ExhibitionResponse':
        return cls(
            id=exhibition.id,
            name=exhibition.name,
            description=exhibition.description,
            category=exhibition.category,
            location=exhibition.location,
            start_date=exhibition.start_date,
            end_date=exhibition.end_date,
            image_url=exhibition.image_url,
            status=exhibition.status.value,
            created_at=exhibition.created_at,
        )


# ============================ Shows ============================


class ShowCreateRequest(CamelSchema):
    name: str = Field(min_length=1, max_length=200)
    description: str = ''
    show_type: str = 'planetarium'
    duration_minutes: int = Field(default=60, gt=0)
    image_url: Optional[str] = None
    is_active: bool = True


class ShowUpdateRequest(CamelSchema):
    name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    description: Optional[str] = None
    show_type: Optional[str] = None
    duration_minutes: Optional[int] = Field(default=None, gt=0)
    image_url: Optional[str] = None
    is_active: Optional[bool] = None


class ShowResponse(CamelSchema):
    id: UUID
    name: str
    description: str
    show_type: str
    duration_minutes: int
    image_url: Optional[str]
    is_active: bool

    @classmethod
    def from_entity(cls, show: Show) -> 'ShowResponse':
        return cls(
            id=show.id,
            name=show.name,
            description=show.description,
            show_type=show.show_type,
            duration_minutes=show.duration_minutes,
            image_url=show.image_url,
            is_active=show.is_active,
        )


# ============================ Pricing ============================


class PricingCreateRequest(CamelSchema):
    ticket_type: TicketType
    price: int = Field(ge=0, description='Minor currency units (paise)')
    exhibition_id: Optional[UUID] = None
    show_id: Optional[UUID] = None
    is_active: bool = True


class PricingUpdateRequest(CamelSchema):
    price: Optional[int] = Field(default=None, ge=0)
    is_active: Optional[bool] = None


class PricingResponse(CamelSchema):
    id: UUID
    ticket_type: str
    price: int
    exhibition_id: Optional[UUID]
    show_id: Optional[UUID]
    is_active: bool

    @classmethod
    def from_entity(cls, pricing: Pricing) -> 'PricingResponse':
        return cls(
            id=pricing.id,
            ticket_type=pricing.ticket_type.value,
            price=pricing.price,
            exhibition_id=pricing.exhibition_id,
            show_id=pricing.show_id,
            is_active=pricing.is_active,
        )
