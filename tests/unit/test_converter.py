import json

import pytest

from domain.concordance import convert_to_concordance
from domain.errors import (
    DuplicateConcordance,
    InvalidIdentifierFormat,
    MalformedPayload,
    MissingGraph,
    MissingOrInvalidId,
    SelfReferentialConcordance,
    UnsupportedMultipleConcepts,
)
from domain.status import ResultStatus

from .conftest import CONCEPT_UUID, read_fixture

TID = "tid_test"

MULTIPLE_TME_UUIDS = [
    "f7326060-c0fe-3ce1-a2ae-8a8bbc0f0d00",
    "e72ffc51-b7b5-3ef9-8c94-425e2344dab3",
    "c2ec187d-2ead-3dca-9853-55f4332aec8f",
    "0aa1fde7-d973-30fe-8df0-073d29ac5b85",
]


def _concept(concept_id: str, *tme_ids: str) -> str:
    entry: dict = {"@id": concept_id}
    if tme_ids:
        entry["http://www.ft.com/ontology/TMEIdentifier"] = [{"@value": v} for v in tme_ids]
    return json.dumps({"@graph": [entry]})


def test_concept_without_tme_ids_is_valid_with_empty_concordance() -> None:
    result = convert_to_concordance(
        '{"@graph":[{"@id":"http://www.ft.com/thing/20db1bd6-59f9-4404-adb5-3165a448f8b0"}]}', TID
    )

    assert result.status is ResultStatus.VALID
    assert result.error is None
    assert result.concept_uuid == CONCEPT_UUID
    assert result.concordance is not None
    assert result.concordance.to_json_dict() == {"uuid": CONCEPT_UUID, "concordedIds": []}


def test_single_tme_id_is_derived() -> None:
    result = convert_to_concordance(read_fixture("single_tme_id.json"), TID)

    assert result.status is ResultStatus.VALID
    assert result.concordance is not None
    assert list(result.concordance.concorded_ids) == ["93c9b7d2-a539-3c0e-ab4d-cd01878be150"]


def test_multiple_tme_ids_keep_input_order() -> None:
    result = convert_to_concordance(read_fixture("multiple_tme_ids.json"), TID)

    assert result.status is ResultStatus.VALID
    assert result.concordance is not None
    assert list(result.concordance.concorded_ids) == MULTIPLE_TME_UUIDS


def test_conversion_output_is_stable() -> None:
    payload = read_fixture("multiple_tme_ids.json")
    first = convert_to_concordance(payload, TID).concordance
    second = convert_to_concordance(payload.encode("utf-8"), "tid_other").concordance

    assert first is not None and second is not None
    assert first.to_json() == second.to_json()
    assert first.to_json() == (
        '{"uuid":"20db1bd6-59f9-4404-adb5-3165a448f8b0","concordedIds":['
        + ",".join(f'"{u}"' for u in MULTIPLE_TME_UUIDS)
        + "]}"
    )


@pytest.mark.parametrize("payload", ["", "   ", "{", "not json", '{"@graph": "nope"}', '{"@graph": [{"@id": 5}]}'])
def test_malformed_payload_is_syntactically_incorrect(payload: str) -> None:
    result = convert_to_concordance(payload, TID)

    assert result.status is ResultStatus.SYNTACTICALLY_INCORRECT
    assert isinstance(result.error, MalformedPayload)
    assert result.concordance is None
    assert result.concept_uuid == ""


@pytest.mark.parametrize("payload", ['{"@graph": []}', "{}", '{"@graph": null}'])
def test_missing_graph_is_semantically_incorrect(payload: str) -> None:
    result = convert_to_concordance(payload, TID)

    assert result.status is ResultStatus.SEMANTICALLY_INCORRECT
    assert isinstance(result.error, MissingGraph)
    assert str(result.error) == "Invalid Request Json: Missing/invalid @graph field"


def test_multiple_concepts_are_not_supported() -> None:
    result = convert_to_concordance(read_fixture("multiple_graphs_in_list.json"), TID)

    assert result.status is ResultStatus.SEMANTICALLY_INCORRECT
    assert isinstance(result.error, UnsupportedMultipleConcepts)
    assert "More than 1 concept in smartlogic concept payload which is currently not supported" in str(result.error)


@pytest.mark.parametrize(
    "concept_id",
    ["", "http://www.ft.com/thing/not-a-uuid", "http://example.com/thing/20db1bd6-59f9-4404-adb5-3165a448f8b0"],
)
def test_missing_or_invalid_id(concept_id: str) -> None:
    result = convert_to_concordance(_concept(concept_id, "MTE3-U2VjdGlvbnM="), TID)

    assert result.status is ResultStatus.SEMANTICALLY_INCORRECT
    assert isinstance(result.error, MissingOrInvalidId)
    assert result.concept_uuid == ""


def test_invalid_tme_id_stops_processing() -> None:
    result = convert_to_concordance(read_fixture("invalid_tme_id.json"), TID)

    assert result.status is ResultStatus.SYNTACTICALLY_INCORRECT
    assert isinstance(result.error, InvalidIdentifierFormat)
    assert "NotAValidTmeId is not a valid TME Id" in str(result.error)
    # Partial concept uuid is still reported for diagnostics
    assert result.concept_uuid == CONCEPT_UUID
    assert result.concordance is None


def test_duplicate_tme_ids_fail_rather_than_dedupe() -> None:
    result = convert_to_concordance(read_fixture("duplicate_tme_ids.json"), TID)

    assert result.status is ResultStatus.SYNTACTICALLY_INCORRECT
    assert isinstance(result.error, DuplicateConcordance)
    assert "contains duplicate TME id values" in str(result.error)


@pytest.mark.parametrize("position", [0, 1, 2])
def test_self_referential_tme_id_is_rejected_at_any_position(position: int) -> None:
    self_uuid = "93c9b7d2-a539-3c0e-ab4d-cd01878be150"
    tme_ids = ["MTE3-U2VjdGlvbnM=", "Mjk=-R2VucmVz"]
    tme_ids.insert(position, "AbCdEfgHiJkLMnOpQrStUvWxYz-0123456789")

    result = convert_to_concordance(_concept(f"http://www.ft.com/thing/{self_uuid}", *tme_ids), TID)

    assert result.status is ResultStatus.SYNTACTICALLY_INCORRECT
    assert isinstance(result.error, SelfReferentialConcordance)
    assert result.concept_uuid == self_uuid


def test_entries_are_validated_in_input_order() -> None:
    concept_id = f"http://www.ft.com/thing/{CONCEPT_UUID}"

    result = convert_to_concordance(_concept(concept_id, "Mjk=-R2VucmVz", "Mjk=-R2VucmVz", "bad"), TID)
    assert isinstance(result.error, DuplicateConcordance)

    result = convert_to_concordance(_concept(concept_id, "Mjk=-R2VucmVz", "bad", "Mjk=-R2VucmVz"), TID)
    assert isinstance(result.error, InvalidIdentifierFormat)


def test_unknown_fields_are_ignored() -> None:
    result = convert_to_concordance(read_fixture("no_tme_ids.json"), TID)

    assert result.status is ResultStatus.VALID
    assert result.concordance is not None
    assert result.concordance.concorded_ids == ()


@pytest.mark.parametrize("payload", ['{"@graph": [{"@id": null}]}', '{"@graph": [null]}'])
def test_null_concept_or_id_is_a_missing_id(payload: str) -> None:
    result = convert_to_concordance(payload, TID)

    assert result.status is ResultStatus.SEMANTICALLY_INCORRECT
    assert isinstance(result.error, MissingOrInvalidId)
    assert result.concept_uuid == ""


@pytest.mark.parametrize("identifier", ['{"@value": null}', "{}", "null"])
def test_null_or_missing_tme_value_is_an_invalid_tme_id(identifier: str) -> None:
    payload = (
        '{"@graph": [{"@id": "http://www.ft.com/thing/' + CONCEPT_UUID + '", '
        '"http://www.ft.com/ontology/TMEIdentifier": [' + identifier + "]}]}"
    )

    result = convert_to_concordance(payload, TID)

    assert result.status is ResultStatus.SYNTACTICALLY_INCORRECT
    assert isinstance(result.error, InvalidIdentifierFormat)
    assert str(result.error) == "Bad Request: Concordance id  is not a valid TME Id"
    assert result.concept_uuid == CONCEPT_UUID
