"""In-memory log capture for the dashboard debug panel."""

from collections import deque
import logging

DEFAULT_CAPACITY = 100


class MemoryLogHandler(logging.Handler):
    """Keep the most recent formatted records in a bounded buffer.

    Lines are prefixed with the level name, except for INFO records.
    """

    def __init__(
        self,
        capacity: int = DEFAULT_CAPACITY,
        level: int = logging.DEBUG,
    ) -> None:
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        super().__init__(level=level)
        self._records: deque[str] = deque(maxlen=capacity)

    @property
    def capacity(self) -> int:
        return self._records.maxlen or 0

    def emit(self, record: logging.LogRecord) -> None:
        try:
            message = self.format(record)
        except Exception:
            self.handleError(record)
            return
        if record.levelno != logging.INFO:
            message = f"{record.levelname}: {message}"
        with self.lock:
            self._records.append(message)

    def lines(self) -> list[str]:
        """Return captured lines, oldest first."""
        with self.lock:
            return list(self._records)

    def clear(self) -> None:
        """Drop every captured line."""
        with self.lock:
            self._records.clear()


def attach_memory_handler(
    logger,
    capacity: int = DEFAULT_CAPACITY,
) -> MemoryLogHandler:
    """Create a MemoryLogHandler and attach it to a logger.

    Args:
        logger: A logging.Logger or an object exposing ``add_handler``.
        capacity: Maximum number of lines kept.

    Returns:
        MemoryLogHandler: The attached handler.
    """
    handler = MemoryLogHandler(capacity=capacity)
    if hasattr(logger, "add_handler"):
        logger.add_handler(handler)
    else:
        logger.addHandler(handler)
    return handler


__all__ = ["DEFAULT_CAPACITY", "MemoryLogHandler", "attach_memory_handler"]
