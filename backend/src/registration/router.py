"""Registration web service endpoint (SOAP 1.1).

POST /ws/DPS_RegistrationServices.wsProvider:dpsDocumentStatusRegWS with a
validateOrgDrawDownBalance or validateOrgParty operation in the body.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Request, Response, status

from dependencies import get_organization_service
from domain.organization.service import OrganizationService
from observability.metrics import org_validations_total
from .soap import SOAP_CONTENT_TYPE, SoapFault, build_fault, build_response, dispatch, parse_envelope

logger = logging.getLogger(__name__)

SERVICE_PATH = "/ws/DPS_RegistrationServices.wsProvider:dpsDocumentStatusRegWS"

router = APIRouter(tags=["Registration"])


def _fault_response(fault: SoapFault) -> Response:
    return Response(
        content=build_fault(fault),
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        media_type=SOAP_CONTENT_TYPE,
    )


@router.post(SERVICE_PATH, response_class=Response)
async def registration_service(
    request: Request,
    service: Annotated[OrganizationService, Depends(get_organization_service)],
):
    """Dispatch one SOAP operation to the organization validation facade.

    Validation failures are regular responses with status "error". Malformed
    envelopes and unknown operations produce a Client fault, anything
    unexpected a Server fault.
    """
    context = getattr(request.state, "work_context", None)
    extra = context.log_extra() if context else {}

    content = await request.body()
    try:
        operation, fields = parse_envelope(content)
        result = dispatch(service, operation, fields)
    except SoapFault as e:
        logger.warning(f"SOAP fault ({e.code}): {e}", extra=extra)
        return _fault_response(e)
    except Exception as e:
        logger.error(f"SOAP request failed: {e}", extra=extra, exc_info=True)
        return _fault_response(SoapFault(str(e) or type(e).__name__, code="Server"))

    org_validations_total.labels(operation=operation, status=result.status).inc()
    logger.info(f"{operation} answered with status {result.status}", extra=extra)
    return Response(content=build_response(operation, result), media_type=SOAP_CONTENT_TYPE)
