"""
Observability module.

Provides logging configuration, structured logging helpers and
correlation ID tracking.
"""

from drive_qa.observability.correlation import get_correlation_id, set_correlation_id
from drive_qa.observability.logger import configure_logging

__all__ = ["configure_logging", "get_correlation_id", "set_correlation_id"]
