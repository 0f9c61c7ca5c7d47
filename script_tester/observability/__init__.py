"""
Logging and metrics for script-tester.
"""

from .logger import configure_logging, get_logger, log_operation, setup_logger

__all__ = [
    "get_logger",
    "setup_logger",
    "configure_logging",
    "log_operation",
]
