from src.platform.types.utc_datetime import as_utc
from src.service.catalog.domain.entity.exhibition_entity import Exhibition
from src.service.catalog.domain.entity.pricing_entity import Pricing
from src.service.catalog.domain.entity.show_entity import Show
from src.service.catalog.domain.enum.catalog_status import ExhibitionStatus
from src.service.catalog.driven_adapter.model.exhibition_model import ExhibitionModel
from src.service.catalog.driven_adapter.model.pricing_model import PricingModel
from src.service.catalog.driven_adapter.model.show_model import ShowModel
from src.service.shared_kernel.domain.enum.ticket_type import TicketType


def exhibition_to_entity(model: ExhibitionModel) -> Exhibition:
    return Exhibition(
        id=model.id,
        name=model.name,
        description=model.description,
        category=model.category,
        location=model.location,
        start_date=model.start_date,
        end_date=model.end_date,
        image_url=model.image_url,
        status=ExhibitionStatus(model.status),
        created_at=as_utc(model.created_at),
        updated_at=as_utc(model.updated_at),
    )


def show_to_entity(model: ShowModel) -> Show:
    return Show(
        id=model.id,
        name=model.name,
        description=model.description,
        show_type=model.show_type,
        duration_minutes=model.duration_minutes,
        image_url=model.image_url,
        is_active=model.is_active,
        created_at=as_utc(model.created_at),
        updated_at=as_utc(model.updated_at),
    )


def pricing_to_entity(model: PricingModel) -> Pricing:
    return Pricing(
        id=model.id,
        exhibition_id=model.exhibition_id,
        show_id=model.show_id,
        ticket_type=TicketType(model.ticket_type),
        price=model.price,
        is_active=model.is_active,
        created_at=as_utc(model.created_at),
        updated_at=as_utc(model.updated_at),
    )
