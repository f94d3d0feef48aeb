from src.service.catalog.driven_adapter.model.exhibition_model import ExhibitionModel
from src.service.catalog.driven_adapter.model.pricing_model import PricingModel
from src.service.catalog.driven_adapter.model.show_model import ShowModel

__all__ = ['ExhibitionModel', 'PricingModel', 'ShowModel']
