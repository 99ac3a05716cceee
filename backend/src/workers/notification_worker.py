"""Output notification worker - registers a rendered document downstream.

Consumes messages from the output notification queue. For each message the
worker:
1. Asks the document service to release the rendered image
2. Downloads the XML metadata sidecar from the SFTP drop
3. Parses the sidecar and maps its fields onto a registration request
4. Registers the document and moves both files to the archive folder

Release lifecycle:
- release refused: files stay in place, status PENDING
- registration accepted: files archived, status ARCHIVED
- any failure after release: files moved to the error folder, status ERRORED
"""

import logging
from dataclasses import dataclass
from typing import AbstractSet, Any, Dict, Optional

from celery import shared_task

from config import get_settings
from dependencies import get_document_service_client, get_file_transfer
from domain.handoff.errors import CollaboratorCallError, MetadataParseError
from domain.handoff.metadata import parse_document_metadata
from domain.handoff.models import ReleaseFileInfo, ReleaseNotice
from domain.handoff.ports import DocumentServicePort, FileTransferPort
from domain.handoff.registration import DocumentReleaseRequest, build_registration_request
from domain.handoff.release_status import ReleaseStatus, is_terminal, transition
from observability.metrics import handoff_messages_total, release_status_total
from observability.work_context import WorkContext

from .base import HandoffTask

logger = logging.getLogger(__name__)

WORKER_NAME = "notification"


@dataclass
class ReleaseOutcome:
    """Result of one output notification invocation."""
    file_id: str
    status: ReleaseStatus
    guid: Optional[str] = None
    message: Optional[str] = None
    error: Optional[Exception] = None

    @property
    def success(self) -> bool:
        return self.error is None

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            "status": "success" if self.success else "failed",
            "file_id": self.file_id,
            "release_status": self.status.value,
        }
        if self.guid:
            result["guid"] = self.guid
        if self.message:
            result["message"] = self.message
        if self.error is not None:
            result["error"] = str(self.error)
        return result


class ReleaseNotificationWorker:
    """Releases a rendered document and forwards its metadata for registration.

    Args:
        document_service: Release and registration service
        file_transfer: SFTP drop holding the release files
        sftp_host: Server name passed to the release service
        remote_location: Base folder on the SFTP drop
        image_extension: Extension of the released image file
    """

    def __init__(
        self,
        document_service: DocumentServicePort,
        file_transfer: FileTransferPort,
        sftp_host: str,
        remote_location: str,
        image_extension: str = "PDF",
    ):
        self.document_service = document_service
        self.file_transfer = file_transfer
        self.sftp_host = sftp_host
        self.remote_location = remote_location
        self.image_extension = image_extension

    def handle(self, notice: ReleaseNotice) -> ReleaseOutcome:
        context = context_for(notice)
        extra = context.log_extra()
        files = ReleaseFileInfo(notice.file_id, self.image_extension, self.remote_location)
        status = ReleaseStatus.PENDING

        try:
            release = self.document_service.release_document(
                DocumentReleaseRequest(server=self.sftp_host, file_name=files.image_release_file_name)
            )
        except Exception as e:
            # Nothing released yet, files stay where they are
            logger.error(
                f"Release of {files.image_release_file_name} failed: {e}", extra=extra, exc_info=True
            )
            return self._finish(ReleaseOutcome(notice.file_id, status, error=e), extra)

        logger.info(
            f"Release response for {files.image_release_file_name}: "
            f"respCode={release.resp_code} respMsg={release.resp_msg}",
            extra=extra,
        )
        if not release.is_success:
            return self._finish(
                ReleaseOutcome(notice.file_id, status, message=release.resp_msg), extra
            )

        status = transition(status, ReleaseStatus.RELEASED)

        try:
            registration = self._register(files, release.guid, extra)
        except Exception as e:
            logger.error(
                f"Registration of {notice.file_id} failed after release: {type(e).__name__}: {e}",
                extra=extra,
                exc_info=True,
            )
            self._move_files(files, files.error_path, extra)
            status = transition(status, ReleaseStatus.ERRORED)
            return self._finish(
                ReleaseOutcome(notice.file_id, status, guid=release.guid, error=e), extra
            )

        logger.info(
            f"Registration response for {notice.file_id}: "
            f"respCode={registration.resp_code} respMsg={registration.resp_msg}",
            extra=extra,
        )

        if not registration.is_success:
            self._move_files(files, files.error_path, extra)
            status = transition(status, ReleaseStatus.ERRORED)
            error = CollaboratorCallError(
                f"Registration of {notice.file_id} refused: "
                f"respCode={registration.resp_code} respMsg={registration.resp_msg}"
            )
            return self._finish(
                ReleaseOutcome(notice.file_id, status, guid=release.guid, error=error), extra
            )

        archived = set()
        try:
            for name in files.release_file_names():
                self.file_transfer.move(files.release_path(name), files.archive_path(name))
                archived.add(name)
        except Exception as e:
            logger.error(f"Archiving release files of {notice.file_id} failed: {e}", extra=extra)
            self._move_files(files, files.error_path, extra, archived=archived)
            status = transition(status, ReleaseStatus.ERRORED)
            return self._finish(
                ReleaseOutcome(notice.file_id, status, guid=release.guid, error=e), extra
            )

        status = transition(status, ReleaseStatus.ARCHIVED)
        return self._finish(
            ReleaseOutcome(notice.file_id, status, guid=release.guid, message=registration.resp_msg),
            extra,
        )

    def _register(self, files: ReleaseFileInfo, guid: Optional[str], extra: Dict[str, str]):
        content = self.file_transfer.download(files.metadata_release_path)
        try:
            text = content.decode("utf-8")
        except UnicodeDecodeError as e:
            raise MetadataParseError(f"Metadata {files.metadata_release_file_name} is not UTF-8: {e}")

        metadata = parse_document_metadata(text)
        request = build_registration_request(metadata.document_data, guid)
        logger.debug(f"Registration request: {request.to_wire()}", extra=extra)
        return self.document_service.register_document(request)

    def _move_files(
        self,
        files: ReleaseFileInfo,
        destination,
        extra: Dict[str, str],
        archived: AbstractSet[str] = frozenset(),
    ) -> None:
        """Move both release files, logging (not raising) individual failures.

        Files named in ``archived`` are taken from the archive folder instead
        of the release location.
        """
        for name in files.release_file_names():
            source = files.archive_path(name) if name in archived else files.release_path(name)
            try:
                self.file_transfer.move(source, destination(name))
            except Exception as e:
                logger.error(f"Could not move {source} to {destination(name)}: {e}", extra=extra)

    def _finish(self, outcome: ReleaseOutcome, extra: Dict[str, str]) -> ReleaseOutcome:
        release_status_total.labels(status=outcome.status.value).inc()
        if outcome.error is not None:
            handoff_messages_total.labels(worker=WORKER_NAME, outcome="failed").inc()
        elif outcome.status == ReleaseStatus.PENDING:
            logger.warning(
                f"Document {outcome.file_id} not released, left in place: {outcome.message}",
                extra=extra,
            )
            handoff_messages_total.labels(worker=WORKER_NAME, outcome="skipped").inc()
        else:
            logger.info(f"Document {outcome.file_id} {outcome.status.value.lower()}", extra=extra)
            handoff_messages_total.labels(worker=WORKER_NAME, outcome="success").inc()
        return outcome


def context_for(notice: ReleaseNotice) -> WorkContext:
    return WorkContext(
        file_id=notice.file_id,
        business_area_cd=notice.business_area_cd or None,
    )


def build_release_notification_worker() -> ReleaseNotificationWorker:
    """Wire the worker from settings."""
    settings = get_settings()
    return ReleaseNotificationWorker(
        document_service=get_document_service_client(),
        file_transfer=get_file_transfer(),
        sftp_host=settings.SFTP_HOST,
        remote_location=settings.SFTP_REMOTE_LOCATION,
        image_extension=settings.IMAGE_EXTENSION,
    )


class ReleaseNotificationTask(HandoffTask):

    def build_worker(self) -> ReleaseNotificationWorker:
        return build_release_notification_worker()


@shared_task(name="dps.output.notification", base=ReleaseNotificationTask, bind=True)
def handle_output_notification(self, payload: Dict[str, Any]) -> Dict[str, Any]:
    """Release and register one rendered document (background task).

    Args:
        payload: Output notification message ``{fileId, businessAreaCd}``

    Returns:
        Dict with result:
        - status: 'success', 'failed' or 'rejected'
        - file_id: Idempotency key of the notification
        - release_status: PENDING, ARCHIVED or ERRORED
        - guid: Document GUID returned by the release (if released)
        - error: Error message (if failed)
        - action: Applied failure policy action (if failed)

    Raises:
        celery.exceptions.Retry: When the retry policy reschedules the message
    """
    try:
        notice = ReleaseNotice.from_payload(payload)
    except ValueError as e:
        return self.reject_payload(WORKER_NAME, payload, e)

    outcome = self.worker.handle(notice)
    if outcome.success:
        return outcome.to_dict()

    # Files moved to the error folder cannot be released again
    return self.handle_failure(
        WORKER_NAME,
        payload,
        outcome,
        idempotency_key=outcome.file_id,
        context=context_for(notice),
        retryable=not is_terminal(outcome.status),
    )
