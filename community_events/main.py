"""
FastAPI application entry point with async lifespan management.

This module initializes the FastAPI application with:
- Structured logging with request correlation IDs
- Async database connection pooling (AsyncDBPool)
- CORS middleware configuration
- Static serving of uploaded event images
- Automatic route discovery and registration
"""

from uuid import uuid4

from asgi_correlation_id import CorrelationIdMiddleware
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from community_events.core import app_lifespan, register_routers, setup_logging
from community_events.core.exceptions import register_exception_handlers
from community_events.main_config import cors_config, fastapi_config, settings, storage_config

# =============================================================================
# Setup Logging (before app creation)
# =============================================================================
setup_logging()

app = FastAPI(
    title=fastapi_config.title,
    description=fastapi_config.description,
    version=fastapi_config.version,
    docs_url=fastapi_config.docs_url,
    redoc_url=fastapi_config.redoc_url,
    openapi_url=fastapi_config.openapi_url,
    root_path=fastapi_config.root_path,
    lifespan=app_lifespan,
    debug=fastapi_config.debug,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_config.origins_list,
    allow_credentials=cors_config.allow_credentials,
    allow_methods=cors_config.methods_list,
    allow_headers=cors_config.headers_list,
)

# Adds request_id to the logging context
app.add_middleware(
    CorrelationIdMiddleware,
    header_name="X-Request-ID",
    generator=lambda: uuid4().hex[:16],
    validator=None,
    transformer=lambda x: x,
)

register_exception_handlers(app)

# Stored image paths ("uploads/events/<file>") resolve against the base URL.
# The directory is created by the lifespan, hence check_dir=False.
app.mount(
    f"/{storage_config.images_dir.strip('/')}",
    StaticFiles(directory=storage_config.images_path, check_dir=False),
    name="event-images",
)

# =============================================================================
# Auto-register all routes
# =============================================================================
register_routers(app)

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "community_events.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.reload,
        log_config=None,  # keep the structlog setup
    )
