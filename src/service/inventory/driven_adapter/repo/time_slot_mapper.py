from src.platform.types.utc_datetime import as_utc
from src.service.inventory.domain.entity.time_slot_entity import TimeSlot
from src.service.inventory.domain.enum.slot_type import SlotType
from src.service.inventory.driven_adapter.model.time_slot_model import TimeSlotModel


def time_slot_to_entity(model: TimeSlotModel) -> TimeSlot:
    return TimeSlot(
        id=model.id,
        exhibition_id=model.exhibition_id,
        show_id=model.show_id,
        slot_date=model.slot_date,
        day_of_week=model.day_of_week,
        start_time=model.start_time,
        end_time=model.end_time,
        capacity=model.capacity,
        current_bookings=model.current_bookings,
        buffer_capacity=model.buffer_capacity,
        slot_type=SlotType(model.slot_type),
        notes=model.notes,
        is_active=model.is_active,
        created_at=as_utc(model.created_at),
        updated_at=as_utc(model.updated_at),
    )


def time_slot_to_model(time_slot: TimeSlot) -> TimeSlotModel:
    return TimeSlotModel(
        id=time_slot.id,
        exhibition_id=time_slot.exhibition_id,
        show_id=time_slot.show_id,
        slot_date=time_slot.slot_date,
        day_of_week=time_slot.day_of_week,
        start_time=time_slot.start_time,
        end_time=time_slot.end_time,
        capacity=time_slot.capacity,
        current_bookings=time_slot.current_bookings,
        buffer_capacity=time_slot.buffer_capacity,
        slot_type=time_slot.slot_type.value,
        notes=time_slot.notes,
        is_active=time_slot.is_active,
    )
