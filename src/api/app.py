# This file builds the FastAPI application and registers all API routers.
# Startup and shutdown own the shared connection pool; the request middleware adds
# request IDs, timing headers and Prometheus metrics.

from __future__ import annotations

import logging
import time
import uuid
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Gauge, Histogram, generate_latest
from starlette.middleware.base import RequestResponseEndpoint

from src.api.api_config import get_api_config
from src.api.dependencies import close_database_client, get_database_client
from src.api.error_handlers import register_error_handlers
from src.api.routers.health import router as health_router
from src.api.routers.inquiries import router as inquiries_router
from src.api.routers.requests import router as requests_router
from src.api.routers.runs import router as runs_router
from src.api.routers.service_types import router as service_types_router
from src.api.routers.sos import router as sos_router
from src.common.logging import configure_logging

LOGGER = logging.getLogger("api")

API_HTTP_REQUESTS_TOTAL = Counter(
    "api_http_requests_total",
    "Total number of HTTP requests processed by the API.",
    ["method", "path", "status_code"],
)
API_HTTP_REQUEST_DURATION_SECONDS = Histogram(
    "api_http_request_duration_seconds",
    "API request duration in seconds.",
    ["method", "path"],
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1, 2.5, 5, 10),
)
API_HTTP_INFLIGHT_REQUESTS = Gauge(
    "api_http_inflight_requests",
    "Number of API requests currently being processed.",
    ["method"],
)


def _route_label(request: Request) -> str:
    # Route templates keep metric label cardinality bounded (no raw ids).
    route = request.scope.get("route")
    return getattr(route, "path", None) or "unmatched"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    try:
        app.state.db_connected_at_startup = get_database_client().can_connect()
    except Exception:
        LOGGER.exception("Database client could not be created at startup")
        app.state.db_connected_at_startup = False
    if not app.state.db_connected_at_startup:
        LOGGER.warning("Database unreachable at startup; requests will fail until it recovers")
    yield
    close_database_client()


def create_app() -> FastAPI:
    """Create configured FastAPI application instance."""

    config = get_api_config()
    configure_logging(config.log_level)

    app = FastAPI(
        title=config.api_name,
        description=(
            "Branch-scoped dispatch API for service requests (runs), run summaries, "
            "service types, inquiries and SOS alerts."
        ),
        version=config.app_version,
        lifespan=lifespan,
        openapi_tags=[
            {"name": "health", "description": "Service liveness, readiness, and version metadata."},
            {"name": "requests", "description": "Branch-scoped service requests (runs)."},
            {"name": "runs", "description": "Per-day summaries of finalized runs."},
            {"name": "service-types", "description": "Service type catalog."},
            {"name": "inquiries", "description": "Branch inquiries and their triage."},
            {"name": "sos", "description": "Guard SOS alerts."},
        ],
    )

    if config.allowed_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=config.allowed_origins,
            allow_credentials=True,
            allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
            allow_headers=["Content-Type", "Authorization", "X-Request-ID"],
        )

    @app.middleware("http")
    async def request_context_middleware(
        request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
        request.state.request_id = request_id

        method_label = request.method
        started = time.perf_counter()
        status_code = 500
        API_HTTP_INFLIGHT_REQUESTS.labels(method=method_label).inc()
        try:
            response: Response = await call_next(request)
            status_code = response.status_code
            duration_ms = (time.perf_counter() - started) * 1000.0

            response.headers["x-request-id"] = request_id
            response.headers["x-response-time-ms"] = f"{duration_ms:.2f}"
            return response
        finally:
            duration_s = time.perf_counter() - started
            path_label = _route_label(request)
            API_HTTP_REQUESTS_TOTAL.labels(
                method=method_label,
                path=path_label,
                status_code=str(status_code),
            ).inc()
            API_HTTP_REQUEST_DURATION_SECONDS.labels(
                method=method_label,
                path=path_label,
            ).observe(duration_s)
            API_HTTP_INFLIGHT_REQUESTS.labels(method=method_label).dec()

    @app.get("/metrics", include_in_schema=False)
    def metrics() -> Response:
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    register_error_handlers(app)

    app.include_router(health_router)
    app.include_router(requests_router, prefix=config.api_version_path)
    app.include_router(runs_router, prefix=config.api_version_path)
    app.include_router(service_types_router, prefix=config.api_version_path)
    app.include_router(inquiries_router, prefix=config.api_version_path)
    app.include_router(sos_router, prefix=config.api_version_path)

    return app


app = create_app()
