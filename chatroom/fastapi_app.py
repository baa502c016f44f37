"""
FastAPI Application Factory.
Creates and configures the FastAPI application with all routers, middleware, and DI.

Endpoints:
- messages (addMessage, getMessages), users (signup, login, getUser,
  deleteUser, resetPassword), /ws event stream, /metrics, health
"""

import logging
import time
from contextlib import asynccontextmanager
from typing import Optional
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from dishka import AsyncContainer
from dishka.integrations.fastapi import setup_dishka

from chatroom.config.logging_config import (
    NO_CORRELATION_ID,
    correlation_id_var,
    setup_logging,
)
from chatroom.config.settings import Config, get_config
from chatroom.domain.ports.broadcaster import Broadcaster
from chatroom.observability.metrics import (
    MetricsErrorType,
    increment_error,
    observe_request_latency,
)
from chatroom.presentation.api import (
    events_router,
    messages_router,
    metrics_router,
    users_router,
)
from chatroom.setup.ioc.container import create_container

logger = logging.getLogger(__name__)


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """Middleware to extract and set correlation ID from request headers."""

    async def dispatch(self, request: Request, call_next):
        correlation_id = request.headers.get("X-Correlation-ID", NO_CORRELATION_ID)

        # Set in contextvars (propagates to async tasks and logging)
        correlation_id_var.set(correlation_id)

        response = await call_next(request)
        response.headers["X-Correlation-ID"] = correlation_id
        return response


class MetricsMiddleware(BaseHTTPMiddleware):
    """Records request latency labelled by route template, not raw path."""

    async def dispatch(self, request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        route = request.scope.get("route")
        observe_request_latency(
            method=request.method,
            route=getattr(route, "path", "unmatched"),
            status_code=response.status_code,
            duration=time.perf_counter() - start,
        )
        return response


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    FastAPI lifespan context manager.

    - Startup: resolve the Broadcaster so the Redis relay (if configured)
      is running before the first request
    - Shutdown: close DI container (stops the relay, disconnects clients)
    """
    container: AsyncContainer = app.state.dishka_container
    await container.get(Broadcaster)
    logger.info("FastAPI application started. DI container initialized.")
    yield
    await container.close()
    logger.info("FastAPI application shutdown. DI container closed.")


def create_fastapi_app(
    container: Optional[AsyncContainer] = None,
    settings: Optional[type[Config]] = None,
) -> FastAPI:
    """
    Application factory for creating FastAPI app.

    Args:
        container: Pre-built dishka container; tests pass one with fakes
        settings: Config profile, defaults to get_config()
    """
    settings = settings or get_config()
    setup_logging(settings.LOG_LEVEL, settings.LOG_PATH)

    app = FastAPI(
        title="Chatroom API",
        description="Messages, accounts and live message updates",
        version="1.0.0",
        lifespan=lifespan,
    )

    # Setup Dishka BEFORE app starts (must add middleware before startup)
    setup_dishka(container or create_container(settings), app)

    app.add_middleware(MetricsMiddleware)
    # Correlation ID middleware (must be added before CORS)
    app.add_middleware(CorrelationIdMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ALLOW_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        logger.warning(f"[VALIDATION ERROR] {request.url.path}: {errors}")
        return JSONResponse(
            status_code=400,
            content={"error": "Validation error", "details": jsonable_encoder(errors)},
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        logger.info(f"[HTTP ERROR {exc.status_code}] {exc.detail}")
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.detail},
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.exception(f"[GLOBAL ERROR] {type(exc).__name__}: {exc}")
        increment_error(MetricsErrorType.UNHANDLED)
        return JSONResponse(
            status_code=500,
            content={"error": "Internal server error"},
        )

    # Health check routes
    @app.get("/", tags=["health"])
    async def root():
        return {"message": "Chatroom server is running."}

    @app.get("/health", tags=["health"])
    async def health():
        return {"status": "healthy"}

    app.include_router(messages_router)  # POST /addMessage, GET /getMessages
    app.include_router(users_router)  # /signup, /login, /getUser, /deleteUser, /resetPassword
    app.include_router(events_router)  # WS /ws
    app.include_router(metrics_router)  # GET /metrics

    return app


# Create the app instance
app = create_fastapi_app()
