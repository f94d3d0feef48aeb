from typing import Optional
from uuid import UUID

import attrs


@attrs.define(frozen=True)
class CapacityChange:
    """Audit record of an admin capacity edit"""

    time_slot_id: UUID
    previous_capacity: int
    new_capacity: int
    changed_by: Optional[str] = None
    reason: Optional[str] = None
