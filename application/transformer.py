"""Transformation-and-dispatch workflows for the HTTP and stream entry points."""

import logging
import secrets
import string

from application.constants import TRANSACTION_ID_PREFIX, TRANSACTION_ID_RANDOM_LENGTH
from application.dispatch import ConcordanceDispatcher, DispatchResult
from domain.concordance import ConversionResult, convert_to_concordance
from domain.schemas import UppConcordance
from infrastructure.constants import TRANSACTION_ID_HEADER
from infrastructure.messaging.message import FTMessage
from infrastructure.observability import log_context
from infrastructure.writer import WriterClient

logger = logging.getLogger(__name__)

_TID_ALPHABET = string.ascii_lowercase + string.digits


def new_transaction_id() -> str:
    """Generate a fresh transaction id, e.g. 'tid_k2m9x0qz7a'."""
    suffix = "".join(secrets.choice(_TID_ALPHABET) for _ in range(TRANSACTION_ID_RANDOM_LENGTH))
    return f"{TRANSACTION_ID_PREFIX}{suffix}"


class TransformerService:
    """
    Stateless service: each call handles one event independently.

    The writer client is injected at construction; the transaction id is
    passed explicitly into every call and onto every writer request.
    """

    def __init__(self, writer: WriterClient, topic: str) -> None:
        self.writer = writer
        self.topic = topic
        self.dispatcher = ConcordanceDispatcher(writer)

    def transform(self, payload: str | bytes, tid: str) -> ConversionResult:
        """Validate and convert a payload without touching the writer."""
        with log_context(transaction_id=tid):
            result = convert_to_concordance(payload, tid)
            logger.debug("Processed concordance transformation (status=%s)", result.status.value)
            return result

    def send(self, concordance: UppConcordance, tid: str) -> DispatchResult:
        """Forward an already-converted record to the writer."""
        with log_context(transaction_id=tid, concept_uuid=concordance.concept_uuid):
            return self.dispatcher.dispatch(concordance, tid)

    def transform_and_send(self, payload: str | bytes, tid: str) -> DispatchResult:
        """Convert then dispatch. A conversion failure makes no writer call."""
        conversion = self.transform(payload, tid)
        if conversion.error is not None or conversion.concordance is None:
            return DispatchResult(
                status=conversion.status,
                concept_uuid=conversion.concept_uuid,
                error=conversion.error,
            )
        return self.send(conversion.concordance, tid)

    def handle_concordance_event(self, message: FTMessage) -> DispatchResult:
        """Stream entry point: one message in, one dispatch outcome out. Never raises."""
        tid = message.header(TRANSACTION_ID_HEADER) or new_transaction_id()
        with log_context(transaction_id=tid):
            logger.debug("Processing message from topic=%s with body: %s", self.topic, message.body)
            result = self.transform_and_send(message.body, tid)
            if result.ok:
                logger.info(
                    "Forwarded concordance record to rw (status=%s)",
                    result.status.value,
                    extra={"uuid": result.concept_uuid or "-"},
                )
            else:
                logger.warning(
                    "Concordance event not forwarded (status=%s): %s",
                    result.status.value,
                    result.error,
                    extra={"uuid": result.concept_uuid or "-"},
                )
            return result
