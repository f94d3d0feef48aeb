from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.command.verify_ticket_use_case import VerifyTicketUseCase
from src.service.ticketing.domain.entity.user_profile_entity import UserProfile
from src.service.ticketing.domain.enum.verification_result import VerificationResult
from src.service.ticketing.driving_adapter.http_controller.auth.role_auth import require_admin
from src.service.ticketing.driving_adapter.http_controller.schema.ticket_schema import (
    VerifyTicketRequest,
    VerifyTicketResponse,
)


router = APIRouter()


@router.post('/verify', status_code=status.HTTP_200_OK, response_model=VerifyTicketResponse)
@Logger.io
async def verify_ticket(
    request: VerifyTicketRequest,
    admin: UserProfile = Depends(require_admin),
    use_case: VerifyTicketUseCase = Depends(VerifyTicketUseCase.depends),
) -> VerifyTicketResponse | JSONResponse:
    outcome = await use_case.execute(
        ticket_code=request.ticket_code.strip(),
        verified_by=admin.id,
        device=request.device,
        location=request.location,
    )
    response = VerifyTicketResponse.from_value(outcome, ticket_code=request.ticket_code)
    if outcome.result == VerificationResult.INVALID:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content=response.model_dump(mode='json', by_alias=True),
        )
    return response
