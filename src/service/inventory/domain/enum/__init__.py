from src.service.inventory.domain.enum.slot_type import SlotType

__all__ = ['SlotType']
