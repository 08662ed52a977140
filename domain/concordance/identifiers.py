"""Canonical identifier derivation and validation."""

import re
import uuid

from domain.errors import InvalidIdentifierFormat

THING_URI_PREFIX = "http://www.ft.com/thing/"
TME_ID_DELIMITER = "-"

UUID_PATTERN = re.compile(r"[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}")

# Name-based UUIDs hash the identifier under the all-zero namespace (UUID v3).
_NIL_NAMESPACE = uuid.UUID(int=0)


def extract_concept_uuid(uri: str) -> str:
    """
    Return the canonical UUID from a concept URI, or "" when the URI is invalid.

    Examples:
        >>> extract_concept_uuid("http://www.ft.com/thing/20db1bd6-59f9-4404-adb5-3165a448f8b0")
        '20db1bd6-59f9-4404-adb5-3165a448f8b0'
        >>> extract_concept_uuid("http://example.com/20db1bd6-59f9-4404-adb5-3165a448f8b0")
        ''
    """
    if not uri.startswith(THING_URI_PREFIX):
        return ""
    candidate = uri[len(THING_URI_PREFIX) :]
    if UUID_PATTERN.fullmatch(candidate) is None:
        return ""
    return candidate


def derive_uuid_from_tme_id(tme_id: str) -> str:
    """
    Validate a TME identifier and derive its canonical UUID.

    A TME id is exactly two non-empty segments joined by a single "-".
    The UUID is derived from the full original string, so the same id
    always maps to the same UUID.

    Raises:
        InvalidIdentifierFormat: wrong segment count or an empty segment
    """
    segments = tme_id.split(TME_ID_DELIMITER)
    if len(segments) != 2 or any(not s for s in segments):
        raise InvalidIdentifierFormat(tme_id)
    return str(uuid.uuid3(_NIL_NAMESPACE, tme_id))
