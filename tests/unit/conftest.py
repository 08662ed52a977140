from collections.abc import Callable
from pathlib import Path

import httpx
import pytest

from infrastructure.writer import WriterClient

RESOURCES_DIR = Path(__file__).resolve().parent.parent / "resources" / "source_json"

WRITER_ADDRESS = "http://localhost:8080/__concordance-rw-dynamodb/"
TOPIC = "TestTopic"
CONCEPT_UUID = "20db1bd6-59f9-4404-adb5-3165a448f8b0"


def read_fixture(name: str) -> str:
    return (RESOURCES_DIR / name).read_text(encoding="utf-8")


class WriterStub:
    """Records every request and answers with a fixed status (or raises)."""

    def __init__(self, status_code: int = 200, error: Exception | None = None) -> None:
        self.status_code = status_code
        self.error = error
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return httpx.Response(self.status_code)

    @property
    def methods(self) -> list[str]:
        return [r.method for r in self.requests]


@pytest.fixture
def fixture_text() -> Callable[[str], str]:
    return read_fixture


@pytest.fixture
def make_writer() -> Callable[[WriterStub], WriterClient]:
    clients: list[WriterClient] = []

    def _make(stub: WriterStub) -> WriterClient:
        client = WriterClient(base_url=WRITER_ADDRESS, transport=httpx.MockTransport(stub))
        clients.append(client)
        return client

    yield _make
    for client in clients:
        client.close()
