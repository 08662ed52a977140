"""Processing outcome for a single concept event."""

from enum import Enum


class ResultStatus(str, Enum):
    """Closed set of outcomes produced once per processing attempt."""

    NOT_FOUND = "not_found"
    SYNTACTICALLY_INCORRECT = "syntactically_incorrect"
    SEMANTICALLY_INCORRECT = "semantically_incorrect"
    VALID = "valid"
    INTERNAL_ERROR = "internal_error"
    SERVICE_UNAVAILABLE = "service_unavailable"
    NO_CONTENT = "no_content"
