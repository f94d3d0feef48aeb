from typing import Optional
from uuid import UUID

import attrs

from src.service.ticketing.domain.enum.verification_result import VerificationResult


@attrs.define(frozen=True)
class TicketVerificationAttempt:
    ticket_code: str
    result: VerificationResult
    verified_by: str
    ticket_id: Optional[UUID] = None
    device: Optional[str] = None
    location: Optional[str] = None
