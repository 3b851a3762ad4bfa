"""A minimal logging interface with a printing and a capturing implementation."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable

__all__ = ["Logger", "FmtLogger", "TestLogger", "default_logger"]


class Logger(ABC):
    """The logging calls lower layers rely on."""

    @abstractmethod
    def debug(self, message: str) -> None:
        """Log at DEBUG level."""

    @abstractmethod
    def error(self, message: str) -> None:
        """Log at ERROR level."""

    @abstractmethod
    def error_with_context(self, err: object, sub: str, *args: str) -> None:
        """Log an error at ERROR level with a subject and context lines."""

    @abstractmethod
    def info(self, message: str) -> None:
        """Log at INFO level."""

    @abstractmethod
    def trace(self, message: str) -> None:
        """Log at TRACE level."""

    @abstractmethod
    def warning(self, message: str) -> None:
        """Log at WARN level."""


class FmtLogger(Logger):
    """Logger that prints every message on its own line to standard output."""

    def debug(self, message: str) -> None:
        print(message)

    def error(self, message: str) -> None:
        print(message)

    def error_with_context(self, err: object, sub: str, *args: str) -> None:
        print(f"err: {err}")
        print(sub)
        for entry in args:
            print(entry)

    def info(self, message: str) -> None:
        print(message)

    def trace(self, message: str) -> None:
        print(message)

    def warning(self, message: str) -> None:
        print(message)


class TestLogger(Logger):
    """Logger that hands every message to a callback; without one, messages are dropped."""

    __test__ = False

    def __init__(self, log: Callable[[str], object] | None = None) -> None:
        self._log = log

    def _emit(self, message: str) -> None:
        if self._log is not None:
            self._log(message)

    def debug(self, message: str) -> None:
        self._emit(message)

    def error(self, message: str) -> None:
        self._emit(message)

    def error_with_context(self, err: object, sub: str, *args: str) -> None:
        self._emit(f"err: {err}")
        self._emit(sub)
        for entry in args:
            self._emit(entry)

    def info(self, message: str) -> None:
        self._emit(message)

    def trace(self, message: str) -> None:
        self._emit(message)

    def warning(self, message: str) -> None:
        self._emit(message)


def default_logger() -> FmtLogger:
    """Return a logger that prints to standard output."""
    return FmtLogger()