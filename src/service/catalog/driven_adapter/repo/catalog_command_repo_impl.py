from uuid import UUID

from sqlalchemy import delete, update

from src.platform.database.session_repo import SessionFactory
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.catalog.app.interface.i_catalog_command_repo import ICatalogCommandRepo
from src.service.catalog.domain.entity.exhibition_entity import Exhibition
from src.service.catalog.domain.entity.pricing_entity import Pricing
from src.service.catalog.domain.entity.show_entity import Show
from src.service.catalog.driven_adapter.model.exhibition_model import ExhibitionModel
from src.service.catalog.driven_adapter.model.pricing_model import PricingModel
from src.service.catalog.driven_adapter.model.show_model import ShowModel
from src.service.catalog.driven_adapter.repo.catalog_mapper import (
    exhibition_to_entity,
    pricing_to_entity,
    show_to_entity,
)


class CatalogCommandRepoImpl(ICatalogCommandRepo):
    def __init__(self, session_factory: SessionFactory):
        self.session_factory = session_factory

    @Logger.io
    async def create_exhibition(self, *, exhibition: Exhibition) -> Exhibition:
        async with self.session_factory() as session:
            model = ExhibitionModel(
                id=exhibition.id,
                name=exhibition.name,
                description=exhibition.description,
                category=exhibition.category,
                location=exhibition.location,
                start_date=exhibition.start_date,
                end_date=exhibition.end_date,
                image_url=exhibition.image_url,
                status=exhibition.status.value,
            )
            session.add(model)
            await session.commit()
            await session.refresh(model)
            return exhibition_to_entity(model)

    @Logger.io
    async def update_exhibition(self, *, exhibition: Exhibition) -> Exhibition:
        async with self.session_factory() as session:
            model = await session.get(ExhibitionModel, exhibition.id)
            if model is None:
                raise NotFoundError('Exhibition not found')

            model.name = exhibition.name
            model.description = exhibition.description
            model.category = exhibition.category
            model.location = exhibition.location
            model.start_date = exhibition.start_date
            model.end_date = exhibition.end_date
            model.image_url = exhibition.image_url
            model.status = exhibition.status.value
            await session.commit()
            await session.refresh(model)
            return exhibition_to_entity(model)

    @Logger.io
    async def create_show(self, *, show: Show) -> Show:
        async with self.session_factory() as session:
            model = ShowModel(
                id=show.id,
                name=show.name,
                description=show.description,
                show_type=show.show_type,
                duration_minutes=show.duration_minutes,
                image_url=show.image_url,
                is_active=show.is_active,
            )
            session.add(model)
            await session.commit()
            await session.refresh(model)
            return show_to_entity(model)

    @Logger.io
    async def update_show(self, *, show: Show) -> Show:
        async with self.session_factory() as session:
            model = await session.get(ShowModel, show.id)
            if model is None:
                raise NotFoundError('Show not found')

            model.name = show.name
            model.description = show.description
            model.show_type = show.show_type
            model.duration_minutes = show.duration_minutes
            model.image_url = show.image_url
            model.is_active = show.is_active
            await session.commit()
            await session.refresh(model)
            return show_to_entity(model)

    @staticmethod
    def _deactivate_siblings(pricing: Pricing):
        return (
            update(PricingModel)
            .where(
                PricingModel.id != pricing.id,
                PricingModel.ticket_type == pricing.ticket_type.value,
                PricingModel.exhibition_id.is_(None)
                if pricing.exhibition_id is None
                else PricingModel.exhibition_id == pricing.exhibition_id,
                PricingModel.show_id.is_(None)
                if pricing.show_id is None
                else PricingModel.show_id == pricing.show_id,
                PricingModel.is_active.is_(True),
            )
            .values(is_active=False)
        )

    @Logger.io
    async def replace_active_pricing(self, *, pricing: Pricing) -> Pricing:
        async with self.session_factory() as session:
            if pricing.is_active:
                await session.execute(self._deactivate_siblings(pricing))

            model = PricingModel(
                id=pricing.id,
                exhibition_id=pricing.exhibition_id,
                show_id=pricing.show_id,
                ticket_type=pricing.ticket_type.value,
                price=pricing.price,
                is_active=pricing.is_active,
            )
            session.add(model)
            await session.commit()
            await session.refresh(model)
            return pricing_to_entity(model)

    @Logger.io
    async def update_pricing(self, *, pricing: Pricing) -> Pricing:
        async with self.session_factory() as session:
            model = await session.get(PricingModel, pricing.id)
            if model is None:
                raise NotFoundError('Pricing not found')
            if pricing.is_active and not model.is_active:
                await session.execute(self._deactivate_siblings(pricing))

            model.price = pricing.price
            model.is_active = pricing.is_active
            await session.commit()
            await session.refresh(model)
            return pricing_to_entity(model)

    @Logger.io
    async def delete_pricing(self, *, pricing_id: UUID) -> bool:
        async with self.session_factory() as session:
            result = await session.execute(
                delete(PricingModel).where(PricingModel.id == pricing_id)
            )
            await session.commit()
            return result.rowcount > 0  # type: ignore[attr-defined]
