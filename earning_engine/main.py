from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from earning_engine.api.engine import router as engine_router
from earning_engine.api.system import router as system_router
from earning_engine.config import get_settings
from earning_engine.models.schemas import ErrorResponse, NotFoundResponse
from earning_engine.observability.logging import configure_logging
from earning_engine.observability.middleware import RequestContextMiddleware
from earning_engine.services.engine_service import WALLET_REQUIRED, EngineService, InvalidRequestError
from earning_engine.services.metrics_generator import MetricsGenerator, RandomSource

AVAILABLE_ENDPOINTS = [
    "GET /",
    "GET /api/status",
    "GET /api/engine/metrics",
    "POST /api/engine/start",
    "POST /api/engine/stop",
]

logger = logging.getLogger(__name__)


def build_engine_service(rng: RandomSource | None = None) -> EngineService:
    settings = get_settings()
    return EngineService(metrics=MetricsGenerator(rng=rng, hourly_rate_range=settings.hourly_rate_range))


@asynccontextmanager
async def _lifespan(app: FastAPI) -> AsyncIterator[None]:
    settings = get_settings()
    configure_logging(settings.log_level)
    logger.info("server.ready", extra={"port": settings.port, "host": settings.host})
    logger.info("server.health_check", extra={"url": f"http://localhost:{settings.port}/"})
    logger.info("server.cors", extra={"allow_origins": settings.cors_allow_origins})
    yield


def _is_json_media_type(content_type: str) -> bool:
    media_type = content_type.split(";", 1)[0].strip().lower()
    return media_type == "application/json" or media_type.endswith("+json")


async def _invalid_request_handler(request: Request, exc: InvalidRequestError) -> JSONResponse:
    return JSONResponse(status_code=400, content=ErrorResponse(error=str(exc)).model_dump())


async def _validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info("request.invalid_body", extra={"errors": exc.errors()})
    # Bodies are only read as JSON; anything else counts as an empty body.
    if not _is_json_media_type(request.headers.get("content-type", "")):
        return JSONResponse(status_code=400, content=ErrorResponse(error=WALLET_REQUIRED).model_dump())
    return JSONResponse(status_code=400, content=ErrorResponse(error="Invalid request body").model_dump())


async def _http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    # Unknown routes and known routes hit with the wrong method look the same to clients.
    if exc.status_code in (404, 405):
        payload = NotFoundResponse(available_endpoints=AVAILABLE_ENDPOINTS)
        return JSONResponse(status_code=404, content=payload.model_dump(by_alias=True))
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(error=str(exc.detail)).model_dump(),
        headers=getattr(exc, "headers", None),
    )


def create_app(engine_service: EngineService | None = None) -> FastAPI:
    settings = get_settings()

    app = FastAPI(
        title="Ultra Earning Engine",
        version=settings.service_version,
        lifespan=_lifespan,
        # "/api/status/" is not a route; it gets the 404 payload, not a redirect.
        redirect_slashes=False,
    )
    app.state.engine_service = engine_service if engine_service is not None else build_engine_service()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "Accept"],
    )
    app.add_middleware(RequestContextMiddleware)

    app.add_exception_handler(InvalidRequestError, _invalid_request_handler)
    app.add_exception_handler(RequestValidationError, _validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, _http_error_handler)

    app.include_router(system_router)
    app.include_router(engine_router)
    return app


app = create_app()
