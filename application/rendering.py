"""Map processing outcomes to externally visible HTTP codes and bodies."""

from typing import Any

from application.constants import DELETED_MESSAGE, FORWARDED_MESSAGE, NOT_FOUND_MESSAGE
from application.dispatch import DispatchResult
from domain.concordance import ConversionResult
from domain.status import ResultStatus

# Total table: every ResultStatus has exactly one HTTP code.
HTTP_STATUS_BY_RESULT: dict[ResultStatus, int] = {
    ResultStatus.VALID: 200,
    ResultStatus.NO_CONTENT: 200,
    ResultStatus.NOT_FOUND: 200,
    ResultStatus.SYNTACTICALLY_INCORRECT: 400,
    ResultStatus.SEMANTICALLY_INCORRECT: 422,
    ResultStatus.SERVICE_UNAVAILABLE: 503,
    ResultStatus.INTERNAL_ERROR: 500,
}

# Non-error outcomes of /transform/send
SEND_SUCCESS_MESSAGES: dict[ResultStatus, str] = {
    ResultStatus.VALID: FORWARDED_MESSAGE,
    ResultStatus.NO_CONTENT: DELETED_MESSAGE,
    ResultStatus.NOT_FOUND: NOT_FOUND_MESSAGE,
}


def http_status_for(status: ResultStatus) -> int:
    """Raises KeyError for an unmapped status rather than guessing a default."""
    return HTTP_STATUS_BY_RESULT[status]


def message_body(message: str) -> dict[str, str]:
    return {"message": message}


def render_transform(result: ConversionResult) -> tuple[int, dict[str, Any]]:
    """Render /transform: the canonical record on success, an error envelope otherwise."""
    if result.error is not None or result.concordance is None:
        return http_status_for(result.status), message_body(str(result.error))
    return http_status_for(result.status), result.concordance.to_json_dict()


def render_send(result: DispatchResult) -> tuple[int, dict[str, Any]]:
    """Render /transform/send: a success or error envelope."""
    if result.error is not None:
        return http_status_for(result.status), message_body(str(result.error))
    return http_status_for(result.status), message_body(SEND_SUCCESS_MESSAGES[result.status])
