"""Client for document release (imaging backend) and registration (Figaro)."""

import logging
from dataclasses import dataclass

from pydantic import ValidationError

from domain.handoff.errors import CollaboratorCallError
from domain.handoff.ports import DocumentServicePort
from domain.handoff.registration import (
    DocumentReleaseRequest,
    DocumentReleaseResponse,
    RegistrationRequest,
    RegistrationResponse,
)

from .http import HttpServiceClient

logger = logging.getLogger(__name__)


@dataclass
class DocumentServiceClient(HttpServiceClient, DocumentServicePort):

    def release_document(self, request: DocumentReleaseRequest) -> DocumentReleaseResponse:
        payload = self._request_json("POST", "/dpsDocument", json=request.model_dump(by_alias=True))
        try:
            return DocumentReleaseResponse.model_validate(payload)
        except ValidationError as e:
            raise CollaboratorCallError(f"Unexpected document release response: {e}")

    def register_document(self, request: RegistrationRequest) -> RegistrationResponse:
        payload = self._request_json("POST", "/dpsDataIntoFigaro", json=request.to_wire())
        try:
            return RegistrationResponse.model_validate(payload)
        except ValidationError as e:
            raise CollaboratorCallError(f"Unexpected registration response: {e}")
