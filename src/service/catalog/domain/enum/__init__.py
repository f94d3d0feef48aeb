from src.service.catalog.domain.enum.catalog_status import ExhibitionStatus

__all__ = ['ExhibitionStatus']
