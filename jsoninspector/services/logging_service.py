"""
Logging service for structured logging of inspection runs.
"""

import logging
import sys
import uuid
from typing import Optional

import structlog

from ..config import settings


class LoggingService:
    """Service for structured logging."""

    def __init__(self):
        self.configured = False
        self.configure(settings.log_level, settings.log_json)

    def configure(self, log_level: str = "INFO", json_output: bool = True):
        """Configure stdlib logging and structlog processors."""
        logging.basicConfig(
            level=getattr(logging, (log_level or "INFO").upper(), logging.INFO),
            format="%(message)s",
            stream=sys.stderr,
        )

        renderer = (
            structlog.processors.JSONRenderer()
            if json_output
            else structlog.dev.ConsoleRenderer()
        )

        structlog.configure(
            processors=[
                structlog.stdlib.filter_by_level,
                structlog.stdlib.add_logger_name,
                structlog.stdlib.add_log_level,
                structlog.stdlib.PositionalArgumentsFormatter(),
                structlog.processors.TimeStamper(fmt="iso"),
                structlog.processors.StackInfoRenderer(),
                structlog.processors.format_exc_info,
                structlog.processors.UnicodeDecoder(),
                renderer
            ],
            context_class=dict,
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )

        self.logger = structlog.get_logger()
        self.configured = True

    def new_run_id(self) -> str:
        """Correlation id for one inspection run."""
        return str(uuid.uuid4())

    def log_api_request(self, request_id: str, method: str, path: str,
                        payload_size: Optional[int] = None):
        """Log API request with correlation ID."""
        self.logger.info(
            "API request",
            request_id=request_id,
            method=method,
            path=path,
            payload_size=payload_size
        )

    def log_api_response(self, request_id: str, status_code: int,
                         duration_ms: int, entity_count: Optional[int] = None,
                         warning_count: Optional[int] = None):
        """Log API response with timing metrics."""
        self.logger.info(
            "API response",
            request_id=request_id,
            status_code=status_code,
            duration_ms=duration_ms,
            entity_count=entity_count,
            warning_count=warning_count
        )

# Global logging service instance
logging_service = LoggingService()
