"""
Error taxonomy for concordance processing.

Every error carries the ResultStatus it maps to. These errors are recovered
locally and returned inside result values; they never escape a processing
attempt as process-fatal exceptions.
"""

from domain.status import ResultStatus


class ConcordanceError(Exception):
    """Base class for all recoverable concordance processing errors."""

    status: ResultStatus = ResultStatus.INTERNAL_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


# ---- Parse errors ----


class MalformedPayload(ConcordanceError):
    status = ResultStatus.SYNTACTICALLY_INCORRECT

    def __init__(self, detail: str) -> None:
        super().__init__(f"Error whilst processing request body: {detail}")
        self.detail = detail


# ---- Semantic errors ----


class MissingGraph(ConcordanceError):
    status = ResultStatus.SEMANTICALLY_INCORRECT

    def __init__(self) -> None:
        super().__init__("Invalid Request Json: Missing/invalid @graph field")


class UnsupportedMultipleConcepts(ConcordanceError):
    status = ResultStatus.SEMANTICALLY_INCORRECT

    def __init__(self) -> None:
        super().__init__(
            "Invalid Request Json: More than 1 concept in smartlogic concept payload "
            "which is currently not supported"
        )


class MissingOrInvalidId(ConcordanceError):
    status = ResultStatus.SEMANTICALLY_INCORRECT

    def __init__(self) -> None:
        super().__init__("Invalid Request Json: Missing/invalid @id field")


# ---- Syntax errors (alternate identifiers) ----


class InvalidIdentifierFormat(ConcordanceError):
    status = ResultStatus.SYNTACTICALLY_INCORRECT

    def __init__(self, tme_id: str) -> None:
        super().__init__(f"Bad Request: Concordance id {tme_id} is not a valid TME Id")
        self.tme_id = tme_id


class SelfReferentialConcordance(ConcordanceError):
    status = ResultStatus.SYNTACTICALLY_INCORRECT

    def __init__(self) -> None:
        super().__init__(
            "Bad Request: Payload from smartlogic has a smartlogic uuid that is the same "
            "as the uuid generated from the TME id"
        )


class DuplicateConcordance(ConcordanceError):
    status = ResultStatus.SYNTACTICALLY_INCORRECT

    def __init__(self) -> None:
        super().__init__("Bad Request: Payload from smartlogic contains duplicate TME id values")


# ---- Writer errors ----


class WriterUnavailable(ConcordanceError):
    """Transport-level failure talking to the writer (connection error, timeout)."""

    status = ResultStatus.SERVICE_UNAVAILABLE

    def __init__(self, method: str, detail: str) -> None:
        super().__init__(f"Service Unavailable: {method} request to writer resulted in error: {detail}")
        self.method = method


class UnexpectedWriterStatus(ConcordanceError):
    """The writer answered with a status code the dispatcher does not handle."""

    status = ResultStatus.INTERNAL_ERROR

    def __init__(self, method: str, status_code: int) -> None:
        super().__init__(f"Internal Error: {method} request to writer returned unexpected status: {status_code}")
        self.method = method
        self.status_code = status_code
