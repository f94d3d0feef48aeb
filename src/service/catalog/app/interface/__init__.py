from src.service.catalog.app.interface.i_catalog_command_repo import ICatalogCommandRepo
from src.service.catalog.app.interface.i_catalog_query_repo import ICatalogQueryRepo

__all__ = ['ICatalogCommandRepo', 'ICatalogQueryRepo']
