"""
Monitoring and Tracing Configuration Module.

This module provides the optional Logfire integration of the server:
- FastAPI endpoint tracing
- SQLAlchemy operation tracing
- Per-request log records with status and latency

Everything is driven by ``settings.logfire``; with Logfire disabled (the
default) request records only go to the standard logging tree.
"""

from __future__ import annotations

from typing import Optional

import logfire
from fastapi import FastAPI

from cityprefs.core.logging_config import get_logger
from cityprefs.server.core.config import LogfireConfig, settings

logger = get_logger(__name__)

_logfire_active = False


def is_logfire_active() -> bool:
    return _logfire_active


def initialize_logfire(app: Optional[FastAPI] = None, config: Optional[LogfireConfig] = None) -> bool:
    """
    Initialize Logfire for monitoring and tracing.

    Args:
        app: FastAPI application to instrument (optional).
        config: Logfire configuration; defaults to ``settings.logfire``.

    Returns:
        True when Logfire was configured, False when it stays disabled.
    """
    global _logfire_active

    config = config or settings.logfire
    if not config.enabled:
        logger.info("Logfire monitoring is disabled. Set LOGFIRE_ENABLED=true to enable.")
        return False

    if not config.token:
        logger.warning(
            "Logfire is enabled but LOGFIRE_TOKEN is not set. "
            "Monitoring will not work. Set LOGFIRE_TOKEN to enable Logfire."
        )
        return False

    logfire.configure(
        token=config.token,
        service_name=config.service_name,
        environment=config.environment,
    )
    _logfire_active = True

    if config.trace_sqlalchemy:
        try:
            logfire.instrument_sqlalchemy()
            logger.info("Logfire: SQLAlchemy instrumentation enabled")
        except Exception as e:
            logger.warning(f"Failed to instrument SQLAlchemy: {e}")

    if config.trace_fastapi:
        if app is not None:
            try:
                logfire.instrument_fastapi(app=app)
                logger.info("Logfire: FastAPI instrumentation enabled")
            except Exception as e:
                logger.warning(f"Failed to instrument FastAPI: {e}")
        else:
            logger.debug("FastAPI app instance not provided, skipping FastAPI instrumentation")

    logger.info(f"Logfire monitoring initialized: environment={config.environment}, service={config.service_name}")
    return True


def log_api_request(method: str, path: str, status_code: int, duration_ms: float) -> None:
    """
    Log an API request with performance metrics.

    Args:
        method: HTTP method
        path: Request path
        status_code: HTTP status code
        duration_ms: Request duration in milliseconds
    """
    logger.debug(f"{method} {path} -> {status_code} ({duration_ms:.2f}ms)")
    if is_logfire_active():
        logfire.info(
            "API request completed",
            method=method,
            path=path,
            status_code=status_code,
            duration_ms=duration_ms,
        )
