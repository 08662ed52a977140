"""
Smartlogic Concordance Transformer: HTTP API
=============================================

Endpoints:
- POST /transform        -> canonical concordance JSON (no writer call)
- POST /transform/send   -> convert and forward to the writer
- GET  /__health         -> FT health-check report
- GET  /__gtg            -> good-to-go (200 / 503)
- GET  /__ping           -> pong
- GET  /__build-info     -> build metadata

Usage:
    python main.py --config configs/service.yaml
"""

import logging
import time

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse, Response
from starlette.concurrency import run_in_threadpool

from application import (
    HealthCheck,
    TransformerService,
    first_failing_check,
    new_transaction_id,
    render_send,
    render_transform,
    run_health_report,
)
from infrastructure.config.models import ServiceConfig
from infrastructure.constants import TRANSACTION_ID_HEADER

logger = logging.getLogger(__name__)


def _transaction_id(request: Request) -> str:
    return getattr(request.state, "transaction_id", None) or new_transaction_id()


def create_app(*, cfg: ServiceConfig, service: TransformerService, checks: list[HealthCheck]) -> FastAPI:
    """Build the FastAPI app; all collaborators are injected, nothing is global."""
    app = FastAPI(
        title=cfg.app_name,
        version=cfg.build_info.version,
        description=cfg.app_description,
    )

    # =========================================================================
    # MIDDLEWARE
    # =========================================================================

    @app.middleware("http")
    async def transaction_aware_request_logging(request: Request, call_next):
        """Resolve the transaction id, echo it back, and log one line per request."""
        tid = request.headers.get(TRANSACTION_ID_HEADER) or new_transaction_id()
        request.state.transaction_id = tid
        started = time.perf_counter()
        response = await call_next(request)
        response.headers[TRANSACTION_ID_HEADER] = tid
        logger.info(
            "%s %s -> %d (%.1fms)",
            request.method,
            request.url.path,
            response.status_code,
            (time.perf_counter() - started) * 1000,
            extra={"tid": tid},
        )
        return response

    # =========================================================================
    # TRANSFORM ENDPOINTS
    # =========================================================================

    @app.post("/transform")
    async def transform(request: Request) -> JSONResponse:
        """Convert a Smartlogic payload and return the canonical record."""
        tid = _transaction_id(request)
        body = await request.body()
        result = await run_in_threadpool(service.transform, body, tid)
        status_code, content = render_transform(result)
        return JSONResponse(status_code=status_code, content=content)

    @app.post("/transform/send")
    async def transform_and_send(request: Request) -> JSONResponse:
        """Convert a Smartlogic payload and forward it to the writer."""
        tid = _transaction_id(request)
        body = await request.body()
        result = await run_in_threadpool(service.transform_and_send, body, tid)
        status_code, content = render_send(result)
        return JSONResponse(status_code=status_code, content=content)

    # =========================================================================
    # ADMIN ENDPOINTS
    # =========================================================================

    @app.get("/__health")
    async def health() -> JSONResponse:
        report = await run_in_threadpool(run_health_report, cfg, checks)
        return JSONResponse(status_code=200, content=report)

    @app.get("/__gtg")
    async def good_to_go() -> Response:
        failure = await run_in_threadpool(first_failing_check, checks)
        if failure is not None:
            check, _ = failure
            return PlainTextResponse(status_code=503, content=f"{check.name} failed")
        return Response(status_code=200)

    @app.get("/__ping")
    async def ping() -> PlainTextResponse:
        return PlainTextResponse("pong")

    @app.get("/__build-info")
    async def build_info() -> JSONResponse:
        info = cfg.build_info
        return JSONResponse(
            content={
                "version": info.version,
                "repository": info.repository,
                "revision": info.revision,
                "builder": info.builder,
                "dateTime": info.date_time,
            }
        )

    return app
