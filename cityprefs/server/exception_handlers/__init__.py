"""
Exception handlers for the cityprefs server.

This package contains the handlers for domain errors and for unhandled
exceptions, and a setup function to register them with the FastAPI app.
"""

from .domain_handler import domain_exception_handler
from .global_handler import global_exception_handler, setup_exception_handlers

__all__ = [
    "domain_exception_handler",
    "global_exception_handler",
    "setup_exception_handlers",
]
