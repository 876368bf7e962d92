"""
Fault diagnostics for text types.

Every fault raised by a text type is reported to the active fault handler
before the exception propagates. The default handler logs the fault.

The handler lives in a ContextVar, so installing one is scoped to the
current thread (or asyncio task) and never leaks into other contexts.

Usage:
    with suppressed_diagnostics():
        text.insert(99, "x")   # raises IndexError, logs nothing
"""

import logging
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from typing import Callable, Iterator, NoReturn, Type

logger = logging.getLogger("smartstr.diagnostics")


@dataclass(frozen=True)
class FaultReport:
    """
    Description of a single fault.

    Fields:
        type_name: Name of the text type that faulted
        operation: Operation name (e.g., "insert", "slice")
        message: Human-readable reason
    """
    type_name: str
    operation: str
    message: str


FaultHandler = Callable[[FaultReport], None]


def log_fault(report: FaultReport) -> None:
    """Default handler: log the fault at WARNING."""
    logger.warning(
        "%s.%s faulted: %s",
        report.type_name,
        report.operation,
        report.message,
    )


def ignore_fault(report: FaultReport) -> None:
    """No-op handler."""


_handler: ContextVar[FaultHandler] = ContextVar("smartstr_fault_handler", default=log_fault)


def current_handler() -> FaultHandler:
    return _handler.get()


@contextmanager
def fault_handler(handler: FaultHandler) -> Iterator[FaultHandler]:
    """
    Install handler for the duration of the block.

    The previous handler is restored on every exit path, including when
    the block raises.

    Yields:
        The previously active handler
    """
    previous = _handler.get()
    token = _handler.set(handler)
    try:
        yield previous
    finally:
        _handler.reset(token)


def suppressed_diagnostics():
    """Install the no-op handler for the duration of the block."""
    return fault_handler(ignore_fault)


def fault(
    owner: object,
    operation: str,
    message: str,
    exc_type: Type[Exception] = IndexError,
) -> NoReturn:
    """
    Report a fault to the active handler and raise it.

    Raises:
        exc_type: Always
    """
    _handler.get()(FaultReport(type(owner).__name__, operation, message))
    raise exc_type(message)
