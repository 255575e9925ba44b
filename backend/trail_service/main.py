"""Composition root for the trail service.

Run with ``uvicorn --factory trail_service.main:create_app``. The environment
is read exactly once here; every collaborator receives its configuration
explicitly through ``app.state``.
"""

import time
import uuid
from contextlib import asynccontextmanager
from typing import Optional

import structlog
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from .api import trails
from .config import Settings, load_settings, resolve_datasource
from .db import Database, TrailRepository
from .logging_config import configure_logging
from .metrics import (
    REQUESTS_TOTAL,
    REQUEST_LATENCY_MS,
    REQUEST_ERRORS_TOTAL,
    TRAILS_KNOWN,
    DATASOURCE_INFO,
)

logger = structlog.get_logger("trail_service")


def create_app(settings: Optional[Settings] = None, *, setup_logging: bool = True) -> FastAPI:
    """Build the application; raises ConfigurationError when the datasource is unusable."""

    if setup_logging:
        configure_logging()
    if settings is None:
        settings = load_settings()

    logger.info("startup", profile=settings.profile, policy=settings.policy.value)
    descriptor = resolve_datasource(settings)
    database = Database(descriptor)
    database.create_all()
    DATASOURCE_INFO.labels(
        driver=descriptor.driver_id, profile=settings.profile, policy=settings.policy.value
    ).set(1)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        try:
            yield
        finally:
            database.dispose()
            logger.info("shutdown", datasource=descriptor.masked_url)

    app = FastAPI(title="Trail Service", lifespan=lifespan)
    app.state.settings = settings
    app.state.datasource = descriptor
    app.state.database = database
    app.state.trails = TrailRepository(database)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(trails.router, prefix="/api/v1/trails", tags=["trails"])

    @app.middleware("http")
    async def add_request_id(request: Request, call_next):
        req_id = request.headers.get("x-request-id") or uuid.uuid4().hex
        request.state.request_id = req_id
        auth_label = "token" if settings.api_token else "none"
        start = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - start) * 1000.0
        response.headers["X-Request-ID"] = req_id

        route = request.scope.get("route")
        path_label = getattr(route, "path", request.url.path)
        REQUESTS_TOTAL.labels(method=request.method, path=path_label, status=response.status_code, auth=auth_label).inc()
        REQUEST_LATENCY_MS.labels(method=request.method, path=path_label).observe(elapsed_ms)
        if response.status_code >= 400:
            REQUEST_ERRORS_TOTAL.labels(method=request.method, path=path_label, status=response.status_code).inc()

        logger.info(
            "http_request",
            path=request.url.path,
            method=request.method,
            status=response.status_code,
            request_id=req_id,
            latency_ms=round(elapsed_ms, 2),
            auth=auth_label,
        )
        return response

    @app.get("/health")
    @app.get("/api/v1/health")
    def health():
        return {"status": "ok", "datasource": descriptor.masked_url}

    @app.get("/metrics")
    def metrics():
        """Prometheus text metrics endpoint."""

        TRAILS_KNOWN.set(app.state.trails.count())
        payload = generate_latest()
        return Response(content=payload, media_type=CONTENT_TYPE_LATEST)

    return app
