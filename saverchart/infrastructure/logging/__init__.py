"""Logging helpers package."""

from .logger import get_app_logger, get_usage_logger
from .memory import MemoryLogHandler, attach_memory_handler

__all__ = [
    "get_app_logger",
    "get_usage_logger",
    "MemoryLogHandler",
    "attach_memory_handler",
]
