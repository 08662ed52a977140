"""HTTP client for the concordances writer (concordances-rw)."""

import logging

import httpx

from domain.errors import WriterUnavailable
from domain.schemas import UppConcordance
from infrastructure.config.models import ServiceConfig
from infrastructure.constants import TRANSACTION_ID_HEADER

logger = logging.getLogger(__name__)

CONCORDANCES_PATH = "concordances/"
GTG_PATH = "__gtg"


class WriterClient:
    """
    Thin wrapper over httpx.Client bound to the writer's base address.

    Every call returns the raw HTTP status code; deciding what a code means is
    the dispatcher's job. Transport failures (connect errors, timeouts) are
    raised as WriterUnavailable.
    """

    def __init__(
        self,
        *,
        base_url: str,
        timeout_s: float = 30.0,
        transport: httpx.BaseTransport | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        self.base_url = base_url if base_url.endswith("/") else base_url + "/"
        self.client = client or httpx.Client(
            base_url=self.base_url,
            timeout=httpx.Timeout(timeout_s),
            transport=transport,
        )

    @classmethod
    def from_cfg(cls, cfg: ServiceConfig) -> "WriterClient":
        return cls(base_url=cfg.writer_address, timeout_s=cfg.writer_timeout_s)

    def concordance_path(self, concept_uuid: str) -> str:
        return f"{CONCORDANCES_PATH}{concept_uuid}"

    def put_concordance(self, concordance: UppConcordance, tid: str) -> int:
        """PUT the full record to concordances/<uuid>."""
        path = self.concordance_path(concordance.concept_uuid)
        try:
            resp = self.client.put(
                path,
                content=concordance.to_json(),
                headers={TRANSACTION_ID_HEADER: tid, "Content-Type": "application/json"},
            )
        except httpx.TransportError as err:
            raise WriterUnavailable("Put", str(err) or type(err).__name__) from err
        logger.debug("PUT %s -> %d", path, resp.status_code, extra={"tid": tid, "uuid": concordance.concept_uuid})
        return resp.status_code

    def delete_concordance(self, concept_uuid: str, tid: str) -> int:
        """DELETE concordances/<uuid> with an empty body."""
        path = self.concordance_path(concept_uuid)
        try:
            resp = self.client.delete(path, headers={TRANSACTION_ID_HEADER: tid})
        except httpx.TransportError as err:
            raise WriterUnavailable("Delete", str(err) or type(err).__name__) from err
        logger.debug("DELETE %s -> %d", path, resp.status_code, extra={"tid": tid, "uuid": concept_uuid})
        return resp.status_code

    def good_to_go(self) -> int:
        """GET the writer's __gtg readiness endpoint and return its status code."""
        try:
            resp = self.client.get(GTG_PATH)
        except httpx.TransportError as err:
            raise WriterUnavailable("Get", str(err) or type(err).__name__) from err
        return resp.status_code

    @property
    def gtg_url(self) -> str:
        return f"{self.base_url}{GTG_PATH}"

    def close(self) -> None:
        self.client.close()
