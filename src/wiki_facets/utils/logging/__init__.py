# ABOUTME: Logging configuration and structured logger helpers
# ABOUTME: Provides loguru sinks for CLI/production runs and structlog loggers for library code

from .config import LoggingMode, configure_logging, detect_logging_mode, get_logging_status
from .utils import LogContext, get_logger, log_api_call, with_page_context

__all__ = [
    # Configuration
    "LoggingMode",
    "configure_logging",
    "detect_logging_mode",
    "get_logging_status",
    # Utilities
    "LogContext",
    "get_logger",
    "log_api_call",
    "with_page_context",
]
