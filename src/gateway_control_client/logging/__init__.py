"""Logging configuration for gateway_control_client."""

from gateway_control_client.logging.config import (
    DEFAULT_LOG_DIR,
    configure_logging,
    get_logger,
)

__all__ = ["DEFAULT_LOG_DIR", "configure_logging", "get_logger"]
