"""
Main Application Entry Point.

This module initializes the FastAPI application, configures middleware
(CORS, request logging), registers exception handlers and includes all API
routers. It serves as the root of the web server.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from cityprefs.core.database import engine, init_db
from cityprefs.core.logging_config import get_logger, setup_logging
from cityprefs.core.monitoring import initialize_logfire

from .api.v1 import cities, health, users
from .core import constant
from .core.config import settings
from .exception_handlers import setup_exception_handlers
from .middleware import RequestLoggingMiddleware

# Initialize logging
setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifespan events.

    Creates the tables on startup when auto-creation is enabled and disposes
    of the connection pool on shutdown.
    """
    logger.info("Starting up cityprefs server...")
    await init_db()

    yield

    logger.info("Shutting down cityprefs server...")
    await engine.dispose()


app = FastAPI(
    title=constant.PROJECT_NAME,
    description="""
    cityprefs Server API

    Users keep city preferences (population, rent, house cost, cost of living) and
    a list of favorite cities. Users can be replaced in full (PUT) or patched with
    sparse JSON documents (PATCH), where absent and null keys keep stored values.
    """,
    version=constant.API_VERSION,
    openapi_url=f"{constant.API_V1_STR}/openapi.json",
    docs_url=f"{constant.API_V1_STR}/docs",
    redoc_url=f"{constant.API_V1_STR}/redoc",
    lifespan=lifespan,
)

cors = settings.cors
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors.origins,
    allow_credentials=cors.allow_credentials,
    allow_methods=cors.allow_methods,
    allow_headers=cors.allow_headers,
)
app.add_middleware(RequestLoggingMiddleware)

setup_exception_handlers(app)
initialize_logfire(app)

app.include_router(health.router, tags=["health"])
app.include_router(users.router, prefix=f"{constant.API_V1_STR}/users")
app.include_router(cities.router, prefix=f"{constant.API_V1_STR}/cities")
