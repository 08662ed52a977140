"""Smartlogic concept -> UPP concordance conversion."""

import logging
from dataclasses import dataclass

from pydantic import ValidationError

from domain.concordance.identifiers import derive_uuid_from_tme_id, extract_concept_uuid
from domain.errors import (
    ConcordanceError,
    DuplicateConcordance,
    MalformedPayload,
    MissingGraph,
    MissingOrInvalidId,
    SelfReferentialConcordance,
    UnsupportedMultipleConcepts,
)
from domain.schemas import SmartlogicConcept, SmartlogicConceptPayload, UppConcordance
from domain.status import ResultStatus

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConversionResult:
    """
    Outcome of validating one payload.

    concept_uuid is filled in as soon as it is known so callers can log it,
    even when a later step fails. concordance is only set on success.
    """

    status: ResultStatus
    concept_uuid: str = ""
    concordance: UppConcordance | None = None
    error: ConcordanceError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _failure(error: ConcordanceError, concept_uuid: str, tid: str) -> ConversionResult:
    logger.error("%s", error, extra={"tid": tid, "uuid": concept_uuid or "-"})
    return ConversionResult(status=error.status, concept_uuid=concept_uuid, error=error)


def _validation_detail(err: ValidationError) -> str:
    errors = err.errors()
    if not errors:
        return str(err)
    first = errors[0]
    loc = ".".join(str(part) for part in first.get("loc", ()))
    return f"{first.get('msg', 'invalid payload')} ({loc})" if loc else str(first.get("msg", "invalid payload"))


def parse_payload(payload: str | bytes) -> SmartlogicConceptPayload:
    """
    Decode a raw JSON-LD payload.

    Raises:
        MalformedPayload: body is empty, not JSON, or does not fit the payload shape
    """
    try:
        return SmartlogicConceptPayload.model_validate_json(payload)
    except ValidationError as err:
        raise MalformedPayload(_validation_detail(err)) from err


def convert_concept(payload: SmartlogicConceptPayload, tid: str) -> ConversionResult:
    """Enforce the single-concept rules and build the canonical record."""
    if not payload.concepts:
        return _failure(MissingGraph(), "", tid)
    if len(payload.concepts) > 1:
        return _failure(UnsupportedMultipleConcepts(), "", tid)

    concept: SmartlogicConcept = payload.concepts[0]

    concept_uuid = extract_concept_uuid(concept.id)
    if not concept_uuid:
        return _failure(MissingOrInvalidId(), "", tid)

    concorded_ids: list[str] = []
    for identifier in concept.tme_identifiers:
        # Order matters: format, then self-reference, then duplicate.
        try:
            derived = derive_uuid_from_tme_id(identifier.value)
        except ConcordanceError as err:
            return _failure(err, concept_uuid, tid)
        if derived == concept_uuid:
            return _failure(SelfReferentialConcordance(), concept_uuid, tid)
        if derived in concorded_ids:
            return _failure(DuplicateConcordance(), concept_uuid, tid)
        concorded_ids.append(derived)

    concordance = UppConcordance(concept_uuid=concept_uuid, concorded_ids=tuple(concorded_ids))
    logger.debug("Concordance record is: %s", concordance.to_json(), extra={"tid": tid, "uuid": concept_uuid})
    return ConversionResult(status=ResultStatus.VALID, concept_uuid=concept_uuid, concordance=concordance)


def convert_to_concordance(payload: str | bytes, tid: str) -> ConversionResult:
    """
    Parse and validate a raw payload, returning a ConversionResult.

    Never raises for bad input: every validation failure is returned as a
    result carrying its status and error.
    """
    try:
        parsed = parse_payload(payload)
    except MalformedPayload as err:
        return _failure(err, "", tid)
    return convert_concept(parsed, tid)
