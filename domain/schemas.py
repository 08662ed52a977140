"""Pydantic models for Smartlogic concept payloads and UPP concordance records."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

TME_IDENTIFIER_KEY = "http://www.ft.com/ontology/TMEIdentifier"


def _null_entries_as_empty(v: Any) -> Any:
    """null list -> [], null entries -> {} (validated like an entry with no fields)."""
    if v is None:
        return []
    if isinstance(v, list):
        return [{} if item is None else item for item in v]
    return v


class TmeIdentifier(BaseModel):
    """One alternate-identifier entry, e.g. {"@value": "MTE3-U2VjdGlvbnM="}."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    value: str = Field(default="", alias="@value")

    @field_validator("value", mode="before")
    @classmethod
    def _null_value_as_empty(cls, v: Any) -> Any:
        return "" if v is None else v


class SmartlogicConcept(BaseModel):
    """A single concept entry inside the JSON-LD @graph."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str = Field(default="", alias="@id")
    tme_identifiers: list[TmeIdentifier] = Field(default_factory=list, alias=TME_IDENTIFIER_KEY)

    @field_validator("id", mode="before")
    @classmethod
    def _null_id_as_empty(cls, v: Any) -> Any:
        return "" if v is None else v

    @field_validator("tme_identifiers", mode="before")
    @classmethod
    def _null_identifiers_as_empty(cls, v: Any) -> Any:
        return _null_entries_as_empty(v)


class SmartlogicConceptPayload(BaseModel):
    """Raw payload published by Smartlogic. Exactly one concept is supported."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    concepts: list[SmartlogicConcept] = Field(default_factory=list, alias="@graph")

    @field_validator("concepts", mode="before")
    @classmethod
    def _null_graph_as_empty(cls, v: Any) -> Any:
        return _null_entries_as_empty(v)


class UppConcordance(BaseModel):
    """
    Canonical concordance record sent to the writer.

    Serialized as {"uuid": ..., "concordedIds": [...]}; concorded ids keep
    input order and never contain duplicates.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    concept_uuid: str = Field(..., alias="uuid")
    concorded_ids: tuple[str, ...] = Field(default=(), alias="concordedIds")

    def to_json_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True)
