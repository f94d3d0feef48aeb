from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from src.service.catalog.domain.entity.exhibition_entity import Exhibition
from src.service.catalog.domain.entity.pricing_entity import Pricing
from src.service.catalog.domain.entity.show_entity import Show
from src.service.catalog.domain.enum.catalog_status import ExhibitionStatus
from src.service.shared_kernel.domain.value_object.price_list import PriceList


class ICatalogQueryRepo(ABC):
    @abstractmethod
    async def list_exhibitions(
        self, *, status: Optional[ExhibitionStatus] = None
    ) -> List[Exhibition]:
        pass

    @abstractmethod
    async def get_exhibition(self, *, exhibition_id: UUID) -> Optional[Exhibition]:
        pass

    @abstractmethod
    async def list_shows(self, *, active_only: bool = True) -> List[Show]:
        pass

    @abstractmethod
    async def get_show(self, *, show_id: UUID) -> Optional[Show]:
        pass

    @abstractmethod
    async def list_pricing(
        self,
        *,
        exhibition_id: Optional[UUID] = None,
        show_id: Optional[UUID] = None,
        active_only: bool = False,
        general_only: bool = False,
    ) -> List[Pricing]:
        pass

    @abstractmethod
    async def get_pricing(self, *, pricing_id: UUID) -> Optional[Pricing]:
        pass

    @abstractmethod
    async def get_price_list(
        self, *, exhibition_id: Optional[UUID], show_id: Optional[UUID]
    ) -> PriceList:
        """
        Active prices of the owner, falling back to general admission prices
        for ticket types the owner does not price itself.
        """
        pass
