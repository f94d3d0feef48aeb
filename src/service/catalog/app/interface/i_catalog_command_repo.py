from abc import ABC, abstractmethod
from uuid import UUID

from src.service.catalog.domain.entity.exhibition_entity import Exhibition
from src.service.catalog.domain.entity.pricing_entity import Pricing
from src.service.catalog.domain.entity.show_entity import Show


class ICatalogCommandRepo(ABC):
    """Catalog writes commit on their own; none of them touch capacity."""

    @abstractmethod
    async def create_exhibition(self, *, exhibition: Exhibition) -> Exhibition:
        pass

    @abstractmethod
    async def update_exhibition(self, *, exhibition: Exhibition) -> Exhibition:
        pass

    @abstractmethod
    async def create_show(self, *, show: Show) -> Show:
        pass

    @abstractmethod
    async def update_show(self, *, show: Show) -> Show:
        pass

    @abstractmethod
    async def replace_active_pricing(self, *, pricing: Pricing) -> Pricing:
        """Insert pricing, deactivating any active row of the same owner and ticket type"""
        pass

    @abstractmethod
    async def update_pricing(self, *, pricing: Pricing) -> Pricing:
        pass

    @abstractmethod
    async def delete_pricing(self, *, pricing_id: UUID) -> bool:
        pass
