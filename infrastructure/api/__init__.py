"""HTTP surface (FastAPI). Imported by the entry point only, never by lower layers."""

from infrastructure.api.app import create_app

__all__ = ["create_app"]
