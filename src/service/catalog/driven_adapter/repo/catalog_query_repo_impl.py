from typing import List, Optional
from uuid import UUID

from sqlalchemy import select

from src.platform.database.session_repo import SessionRepo
from src.platform.logging.loguru_io import Logger
from src.service.catalog.app.interface.i_catalog_query_repo import ICatalogQueryRepo
from src.service.catalog.domain.entity.exhibition_entity import Exhibition
from src.service.catalog.domain.entity.pricing_entity import Pricing
from src.service.catalog.domain.entity.show_entity import Show
from src.service.catalog.domain.enum.catalog_status import ExhibitionStatus
from src.service.catalog.driven_adapter.model.exhibition_model import ExhibitionModel
from src.service.catalog.driven_adapter.model.pricing_model import PricingModel
from src.service.catalog.driven_adapter.model.show_model import ShowModel
from src.service.catalog.driven_adapter.repo.catalog_mapper import (
    exhibition_to_entity,
    pricing_to_entity,
    show_to_entity,
)
from src.service.shared_kernel.domain.enum.ticket_type import TicketType
from src.service.shared_kernel.domain.value_object.price_list import PriceList


class CatalogQueryRepoImpl(SessionRepo, ICatalogQueryRepo):
    @Logger.io
    async def list_exhibitions(
        self, *, status: Optional[ExhibitionStatus] = None
    ) -> List[Exhibition]:
        stmt = select(ExhibitionModel).order_by(ExhibitionModel.start_date, ExhibitionModel.name)
        if status is not None:
            stmt = stmt.where(ExhibitionModel.status == status.value)

        async with self._get_session() as session:
            result = await session.execute(stmt)
            return [exhibition_to_entity(row) for row in result.scalars().all()]

    @Logger.io
    async def get_exhibition(self, *, exhibition_id: UUID) -> Optional[Exhibition]:
        async with self._get_session() as session:
            model = await session.get(ExhibitionModel, exhibition_id)
            return exhibition_to_entity(model) if model else None

    @Logger.io
    async def list_shows(self, *, active_only: bool = True) -> List[Show]:
        stmt = select(ShowModel).order_by(ShowModel.name)
        if active_only:
            stmt = stmt.where(ShowModel.is_active.is_(True))

        async with self._get_session() as session:
            result = await session.execute(stmt)
            return [show_to_entity(row) for row in result.scalars().all()]

    @Logger.io
    async def get_show(self, *, show_id: UUID) -> Optional[Show]:
        async with self._get_session() as session:
            model = await session.get(ShowModel, show_id)
            return show_to_entity(model) if model else None

    @Logger.io
    async def list_pricing(
        self,
        *,
        exhibition_id: Optional[UUID] = None,
        show_id: Optional[UUID] = None,
        active_only: bool = False,
        general_only: bool = False,
    ) -> List[Pricing]:
        stmt = select(PricingModel).order_by(PricingModel.ticket_type)
        if exhibition_id is not None:
            stmt = stmt.where(PricingModel.exhibition_id == exhibition_id)
        if show_id is not None:
            stmt = stmt.where(PricingModel.show_id == show_id)
        if general_only:
            stmt = stmt.where(PricingModel.exhibition_id.is_(None), PricingModel.show_id.is_(None))
        if active_only:
            stmt = stmt.where(PricingModel.is_active.is_(True))

        async with self._get_session() as session:
            result = await session.execute(stmt)
            return [pricing_to_entity(row) for row in result.scalars().all()]

    @Logger.io
    async def get_pricing(self, *, pricing_id: UUID) -> Optional[Pricing]:
        async with self._get_session() as session:
            model = await session.get(PricingModel, pricing_id)
            return pricing_to_entity(model) if model else None

    @Logger.io
    async def get_price_list(
        self, *, exhibition_id: Optional[UUID], show_id: Optional[UUID]
    ) -> PriceList:
        general = await self.list_pricing(active_only=True, general_only=True)
        prices = {p.ticket_type: p.price for p in general}

        if exhibition_id is not None or show_id is not None:
            owned = await self.list_pricing(
                exhibition_id=exhibition_id, show_id=show_id, active_only=True
            )
            prices |= {p.ticket_type: p.price for p in owned}

        return PriceList(prices={TicketType(t): price for t, price in prices.items()})
