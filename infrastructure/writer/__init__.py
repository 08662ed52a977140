"""Writer (concordances-rw) HTTP client."""

from infrastructure.writer.client import WriterClient

__all__ = ["WriterClient"]
