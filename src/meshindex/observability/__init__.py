"""
Observability for the mesh policy index.

Structured logging shared by every module; see
``meshindex.observability.logging``.
"""

from meshindex.observability.logging import (
    HumanReadableFormatter,
    IndexLogger,
    LOG_FORMATS,
    StructuredFormatter,
    configure_logging,
    get_logger,
)

__all__ = [
    "HumanReadableFormatter",
    "IndexLogger",
    "LOG_FORMATS",
    "StructuredFormatter",
    "configure_logging",
    "get_logger",
]
