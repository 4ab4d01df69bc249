"""Core Ledgerly utilities.

This module exports core utilities for use throughout the application.
"""

from ledgerly.core.config import Settings, get_settings
from ledgerly.core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    LedgerlyError,
    NotFoundError,
    PersistenceError,
    ValidationError,
)
from ledgerly.core.logging import (
    LoggingContext,
    bind_correlation_id,
    clear_context,
    configure_logging,
    get_logger,
)

__all__ = [
    "AuthenticationError",
    "AuthorizationError",
    "ConflictError",
    "LedgerlyError",
    "LoggingContext",
    "NotFoundError",
    "PersistenceError",
    "Settings",
    "ValidationError",
    "bind_correlation_id",
    "clear_context",
    "configure_logging",
    "get_logger",
    "get_settings",
]
