"""
Concordance conversion: identifier derivation and payload validation.

All functions in this package are pure apart from logging (no network I/O).
"""

from domain.concordance.converter import (
    ConversionResult,
    convert_concept,
    convert_to_concordance,
    parse_payload,
)
from domain.concordance.identifiers import (
    THING_URI_PREFIX,
    derive_uuid_from_tme_id,
    extract_concept_uuid,
)

__all__ = [
    "ConversionResult",
    "convert_to_concordance",
    "convert_concept",
    "parse_payload",
    "derive_uuid_from_tme_id",
    "extract_concept_uuid",
    "THING_URI_PREFIX",
]
