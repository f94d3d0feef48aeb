from src.service.inventory.domain.value_object.capacity_change import CapacityChange

__all__ = ['CapacityChange']
