from src.service.inventory.app.interface.i_time_slot_command_repo import ITimeSlotCommandRepo
from src.service.inventory.app.interface.i_time_slot_query_repo import ITimeSlotQueryRepo

__all__ = ['ITimeSlotCommandRepo', 'ITimeSlotQueryRepo']
