from src.service.inventory.driven_adapter.model.capacity_log_model import CapacityLogModel
from src.service.inventory.driven_adapter.model.time_slot_model import TimeSlotModel

__all__ = ['CapacityLogModel', 'TimeSlotModel']
