"""Logging configuration."""

from .logger import configure_logging, get_logger, log_performance, logger

__all__ = ["logger", "configure_logging", "get_logger", "log_performance"]
