"""
Structured logging for txshield.

JSON logs with timestamp, event_type and detection fields.
Use get_logger() in all engine modules for aggregation-friendly output.
"""

from txshield.shield_logging.logger import configure_structlog, get_logger

__all__ = ["configure_structlog", "get_logger"]
