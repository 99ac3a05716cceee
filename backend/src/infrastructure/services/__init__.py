"""HTTP clients for downstream services."""

from .document_service_client import DocumentServiceClient
from .dps_email_client import DpsEmailClient
from .ords_org_client import OrdsOrgApiClient

__all__ = ["DocumentServiceClient", "DpsEmailClient", "OrdsOrgApiClient"]
