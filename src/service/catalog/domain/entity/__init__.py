from src.service.catalog.domain.entity.exhibition_entity import Exhibition
from src.service.catalog.domain.entity.pricing_entity import Pricing
from src.service.catalog.domain.entity.show_entity import Show

__all__ = ['Exhibition', 'Pricing', 'Show']
