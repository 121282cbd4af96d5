"""FastAPI application factory."""

from fastapi import FastAPI

from .api import api_router
from .middleware.headers import CORSHeadersMiddleware
from .middleware.logging import LoggingMiddleware


def create_app(service_instance, config=None, lifespan=None) -> FastAPI:
    """Create and configure FastAPI application.

    The service is injected rather than created here, so tests can pass a
    service built on an in-memory store. ``app.py`` passes ``None`` and a
    lifespan that connects to PostgreSQL and fills ``app.state.service``.

    Args:
        service_instance: ShortLinkService instance (or None until startup)
        config: Configuration instance
        lifespan: Optional lifespan context manager

    Returns:
        Configured FastAPI app
    """
    app = FastAPI(
        title="UReduce",
        description="Deterministic URL shortening service",
        version="1.0.0",
        docs_url="/api/docs",
        redoc_url=None,
        openapi_url="/api/openapi.json",
        lifespan=lifespan,
    )

    app.state.service = service_instance
    app.state.config = config

    # Last added runs first: logging wraps CORS, so logged responses carry the headers
    app.add_middleware(CORSHeadersMiddleware)
    app.add_middleware(LoggingMiddleware)

    app.include_router(api_router)

    return app
