"""Write-or-delete dispatch of canonical concordance records to the writer."""

import logging
from dataclasses import dataclass

from application.constants import DELETE_MISSING_CODE, DELETE_REMOVED_CODE, WRITE_SUCCESS_CODES
from domain.errors import ConcordanceError, UnexpectedWriterStatus, WriterUnavailable
from domain.schemas import UppConcordance
from domain.status import ResultStatus
from infrastructure.writer import WriterClient

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DispatchResult:
    """Outcome of forwarding (or failing to forward) one record."""

    status: ResultStatus
    concept_uuid: str = ""
    error: ConcordanceError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class ConcordanceDispatcher:
    """
    Decide the downstream action for a canonical record.

    A record with concorded ids is an active concordance and is written
    (PUT, 200/201 -> VALID). A record without any is retracted
    (DELETE, 204 -> NO_CONTENT, 404 -> NOT_FOUND). Transport failures map to
    SERVICE_UNAVAILABLE and any other writer status to INTERNAL_ERROR.
    Exactly one writer call is made per dispatch; nothing is retried.
    """

    def __init__(self, writer: WriterClient) -> None:
        self.writer = writer

    def dispatch(self, concordance: UppConcordance, tid: str) -> DispatchResult:
        log_extra = {"tid": tid, "uuid": concordance.concept_uuid}
        if concordance.concorded_ids:
            logger.debug("Concordance found; forwarding request to writer", extra=log_extra)
            return self._write(concordance, tid)
        logger.debug("No concordance found; making delete request", extra=log_extra)
        return self._delete(concordance.concept_uuid, tid)

    def _write(self, concordance: UppConcordance, tid: str) -> DispatchResult:
        concept_uuid = concordance.concept_uuid
        try:
            status_code = self.writer.put_concordance(concordance, tid)
        except WriterUnavailable as err:
            return self._failure(err, concept_uuid, tid)

        if status_code in WRITE_SUCCESS_CODES:
            return DispatchResult(status=ResultStatus.VALID, concept_uuid=concept_uuid)
        return self._failure(UnexpectedWriterStatus("Put", status_code), concept_uuid, tid)

    def _delete(self, concept_uuid: str, tid: str) -> DispatchResult:
        try:
            status_code = self.writer.delete_concordance(concept_uuid, tid)
        except WriterUnavailable as err:
            return self._failure(err, concept_uuid, tid)

        if status_code == DELETE_REMOVED_CODE:
            return DispatchResult(status=ResultStatus.NO_CONTENT, concept_uuid=concept_uuid)
        if status_code == DELETE_MISSING_CODE:
            logger.info("Concordance record doesn't exist", extra={"tid": tid, "uuid": concept_uuid})
            return DispatchResult(status=ResultStatus.NOT_FOUND, concept_uuid=concept_uuid)
        return self._failure(UnexpectedWriterStatus("Delete", status_code), concept_uuid, tid)

    @staticmethod
    def _failure(error: ConcordanceError, concept_uuid: str, tid: str) -> DispatchResult:
        logger.error("%s", error, extra={"tid": tid, "uuid": concept_uuid})
        return DispatchResult(status=error.status, concept_uuid=concept_uuid, error=error)
