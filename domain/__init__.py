"""
Domain layer: Business logic with minimal external dependencies.

Contains:
- schemas: Pydantic models for Smartlogic payloads and UPP concordances
- status: ResultStatus outcome enum
- errors: Recoverable error taxonomy
- concordance: Identifier derivation and payload conversion
"""

from domain.schemas import SmartlogicConcept, SmartlogicConceptPayload, TmeIdentifier, UppConcordance
from domain.status import ResultStatus

__all__ = [
    "ResultStatus",
    "SmartlogicConcept",
    "SmartlogicConceptPayload",
    "TmeIdentifier",
    "UppConcordance",
]
