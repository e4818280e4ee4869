"""Application loggers writing to the project logs directory."""

from collections.abc import Callable
from datetime import datetime
import logging
from pathlib import Path

from saverchart.utils.utils import get_project_root

FormatterFactory = Callable[[], logging.Formatter]
FileHandlerFactory = Callable[[Path, logging.Formatter], logging.Handler]
ConsoleHandlerFactory = Callable[[logging.Formatter], logging.Handler]


class LoggerBuilder:
    """Fluent builder for file and console backed loggers.

    Log files land in ``<project>/logs/<subdir>/<YYYYMMDD>_<prefix>.log``.
    """

    def __init__(self) -> None:
        self._name = "saverchart"
        self._subdir = "app"
        self._prefix = "app_logs"
        self._console = True
        self._level = logging.INFO
        self._formatter_factory: FormatterFactory = self._default_formatter
        self._file_handler_factory: FileHandlerFactory = (
            self._default_file_handler
        )
        self._console_handler_factory: ConsoleHandlerFactory = (
            self._default_console_handler
        )

    def name(self, value: str) -> "LoggerBuilder":
        """Set the logger name."""
        self._name = value
        return self

    def subdir(self, value: str) -> "LoggerBuilder":
        """Set the subdirectory under logs/."""
        self._subdir = value
        return self

    def prefix(self, value: str) -> "LoggerBuilder":
        """Set the log file name prefix."""
        self._prefix = value
        return self

    def console(self, enabled: bool) -> "LoggerBuilder":
        """Enable or disable console output."""
        self._console = enabled
        return self

    def level(self, value: int) -> "LoggerBuilder":
        """Set the logger level."""
        self._level = value
        return self

    def formatter(self, factory: FormatterFactory) -> "LoggerBuilder":
        """Set the formatter factory."""
        self._formatter_factory = factory
        return self

    def file_handler(self, factory: FileHandlerFactory) -> "LoggerBuilder":
        """Set the file handler factory."""
        self._file_handler_factory = factory
        return self

    def console_handler(
        self,
        factory: ConsoleHandlerFactory,
    ) -> "LoggerBuilder":
        """Set the console handler factory."""
        self._console_handler_factory = factory
        return self

    def build(self) -> logging.Logger:
        """Return the configured logger, creating handlers only once.

        Returns:
            logging.Logger: Logger registered under the configured name.
        """
        logger = logging.getLogger(self._name)
        if logger.handlers:
            return logger
        logger.setLevel(self._level)
        logger.propagate = False

        fmt = self._formatter_factory()
        log_dir = get_project_root() / "logs" / self._subdir
        log_dir.mkdir(parents=True, exist_ok=True)
        log_path = log_dir / f"{self._today_stamp()}_{self._prefix}.log"
        logger.addHandler(self._file_handler_factory(log_path, fmt))
        if self._console:
            logger.addHandler(self._console_handler_factory(fmt))
        return logger

    @staticmethod
    def _today_stamp() -> str:
        return datetime.now().strftime("%Y%m%d")

    @staticmethod
    def _default_formatter() -> logging.Formatter:
        return logging.Formatter(
            "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
        )

    @staticmethod
    def _default_file_handler(
        path: Path,
        fmt: logging.Formatter,
    ) -> logging.Handler:
        handler = logging.FileHandler(path, encoding="utf-8")
        handler.setLevel(logging.INFO)
        handler.setFormatter(fmt)
        return handler

    @staticmethod
    def _default_console_handler(fmt: logging.Formatter) -> logging.Handler:
        handler = logging.StreamHandler()
        handler.setLevel(logging.INFO)
        handler.setFormatter(fmt)
        return handler


class Logger:
    """Singleton wrapper delegating to a built logging.Logger."""

    _instance = None
    _subdir = "app"
    _prefix = "app_logs"

    def __new__(cls, name: str = "saverchart"):
        if cls._instance is None:
            instance = super().__new__(cls)
            instance.logger = (
                LoggerBuilder()
                .name(name)
                .subdir(cls._subdir)
                .prefix(cls._prefix)
                .build()
            )
            cls._instance = instance
        return cls._instance

    def info(self, message: str) -> None:
        self.logger.info(message)

    def warning(self, message: str) -> None:
        self.logger.warning(message)

    def error(self, message: str) -> None:
        self.logger.error(message)

    def debug(self, message: str) -> None:
        self.logger.debug(message)

    def critical(self, message: str) -> None:
        self.logger.critical(message)

    def add_handler(self, handler: logging.Handler) -> None:
        """Attach an extra handler to the wrapped logger."""
        self.logger.addHandler(handler)

    def remove_handler(self, handler: logging.Handler) -> None:
        """Detach a handler from the wrapped logger."""
        self.logger.removeHandler(handler)


class AppLogger(Logger):
    """Logger for application events."""

    _instance = None
    _subdir = "app"
    _prefix = "app_logs"


class UsageLogger(Logger):
    """Logger for dashboard usage events."""

    _instance = None
    _subdir = "usage"
    _prefix = "usage_logs"


def get_app_logger() -> AppLogger:
    """Return the shared application logger."""
    return AppLogger("saverchart.app")


def get_usage_logger() -> UsageLogger:
    """Return the shared usage logger."""
    return UsageLogger("saverchart.usage")


__all__ = [
    "LoggerBuilder",
    "Logger",
    "AppLogger",
    "UsageLogger",
    "get_app_logger",
    "get_usage_logger",
]
