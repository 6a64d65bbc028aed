"""Payment Instructions Route - POST /payment-instructions.

Invariants:
    - Body validated by PaymentInstructionRequest before the handler runs
    - Content-Type must be JSON (InvalidRequestError otherwise)
    - Schema and Content-Type failures on this path answer with the SY03 Outcome shape
      (see api/error_handlers.py)
    - HTTP 200 for AP00/AP02, HTTP 400 for every other status code
    - Any exception inside settlement becomes the fixed SY03 "Internal server error" Outcome
    - today and settings arrive through dependencies (overridable in tests)
"""

import logging
from datetime import date

from fastapi import APIRouter, Depends, Header, status
from fastapi.responses import JSONResponse

from payinstruct.config import Settings, get_settings
from payinstruct.core.errors import ErrorContext, InvalidRequestError
from payinstruct.core.outcome import internal_error
from payinstruct.infrastructure.clock import utc_today
from payinstruct.schemas.payment import PaymentInstructionRequest, PaymentOutcomeResponse
from payinstruct.services.payment_instructions import process_payment_request

logger = logging.getLogger(__name__)
PAYMENT_INSTRUCTIONS_PATH = "/payment-instructions"
router = APIRouter(tags=["payment-instructions"])


async def require_json_content_type(
    content_type: str | None = Header(default=None),
) -> None:
    """Reject non-JSON requests before the body is interpreted."""
    if not content_type or "application/json" not in content_type.lower():
        raise InvalidRequestError(
            "Content-Type must be application/json",
            ErrorContext(field_name="content-type"),
        )


@router.post(
    PAYMENT_INSTRUCTIONS_PATH,
    response_model=PaymentOutcomeResponse,
    responses={status.HTTP_400_BAD_REQUEST: {"model": PaymentOutcomeResponse}},
    dependencies=[Depends(require_json_content_type)],
)
async def create_payment_instruction(
    body: PaymentInstructionRequest,
    settings: Settings = Depends(get_settings),
    today: date = Depends(utc_today),
):
    """Parse, validate and settle one payment instruction."""
    try:
        outcome = process_payment_request(
            body.model_dump(),
            today=today,
            supported_currencies=settings.currency_set,
        )
    except Exception as e:
        logger.error(f"Payment instruction failed: {e}", exc_info=True)
        outcome = internal_error()

    http_status = (
        status.HTTP_200_OK if outcome.is_accepted
        else status.HTTP_400_BAD_REQUEST
    )
    logger.info(
        "payment-instructions-request-completed",
        extra={
            "status_code": outcome.status_code.value,
            "instruction_type": outcome.type,
            "http_status": http_status,
            "path": PAYMENT_INSTRUCTIONS_PATH,
        },
    )
    return JSONResponse(status_code=http_status, content=outcome.to_response())
