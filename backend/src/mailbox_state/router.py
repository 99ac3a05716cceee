"""Mailbox state API endpoints

PUT /emails/{email_id}/processed and PUT /emails/{email_id}/processFailed,
where email_id is the base64-encoded mailbox message id. Collaborator failures
are answered with 400 and a refused acknowledgment, not a server error.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from dependencies import get_mailbox_state_service
from .schemas import AckResponse, MailboxAckRequest
from .service import MailboxStateService


router = APIRouter(prefix="/emails", tags=["Mailbox"])


def _respond(ack: AckResponse) -> JSONResponse:
    status_code = status.HTTP_200_OK if ack.acknowledge else status.HTTP_400_BAD_REQUEST
    return JSONResponse(status_code=status_code, content=ack.model_dump())


@router.put(
    "/{email_id}/processed",
    response_model=AckResponse,
    responses={400: {"model": AckResponse}},
)
def email_processed(
    email_id: str,
    body: MailboxAckRequest,
    request: Request,
    service: Annotated[MailboxStateService, Depends(get_mailbox_state_service)],
):
    """Move the email to the processed folder."""
    context = getattr(request.state, "work_context", None)
    return _respond(service.mark_processed(email_id, body, context))


@router.put(
    "/{email_id}/processFailed",
    response_model=AckResponse,
    responses={400: {"model": AckResponse}},
)
def email_process_failed(
    email_id: str,
    body: MailboxAckRequest,
    request: Request,
    service: Annotated[MailboxStateService, Depends(get_mailbox_state_service)],
):
    """Move the email to the error folder."""
    context = getattr(request.state, "work_context", None)
    return _respond(service.mark_failed(email_id, body, context))
