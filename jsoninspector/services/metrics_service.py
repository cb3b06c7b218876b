"""
Metrics service for timing inspection runs.
"""

import time
from typing import Dict, Any, Optional
from contextlib import contextmanager

from .logging_service import logging_service


class MetricsService:
    """Service for collecting operation timings."""

    def __init__(self):
        self.metrics_cache: Dict[str, Dict[str, Any]] = {}

    @contextmanager
    def measure_time(self, operation_name: str, context: Optional[Dict[str, Any]] = None):
        """Context manager for measuring operation duration."""
        start_time = time.time()
        operation_context = context or {}

        try:
            yield
            duration_ms = int((time.time() - start_time) * 1000)
            self.metrics_cache[operation_name] = {
                'duration_ms': duration_ms,
                'success': True
            }

            logging_service.logger.info(
                f"Operation completed: {operation_name}",
                operation=operation_name,
                duration_ms=duration_ms,
                **operation_context
            )

        except Exception as e:
            duration_ms = int((time.time() - start_time) * 1000)
            self.metrics_cache[operation_name] = {
                'duration_ms': duration_ms,
                'success': False
            }

            logging_service.logger.error(
                f"Operation failed: {operation_name}",
                operation=operation_name,
                duration_ms=duration_ms,
                error=str(e),
                **operation_context
            )
            raise

# Global metrics service instance
metrics_service = MetricsService()
