from src.service.inventory.domain.entity.time_slot_entity import TimeSlot

__all__ = ['TimeSlot']
