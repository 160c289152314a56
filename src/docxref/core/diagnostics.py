"""Diagnostic abstractions shared by the registry, the loader and the CLI."""

from __future__ import annotations

from collections.abc import Mapping
import logging
from typing import Any, Protocol, runtime_checkable


logger = logging.getLogger(__name__)


@runtime_checkable
class DiagnosticEmitter(Protocol):
    """Interface used to surface warnings, errors, and structured events."""

    debug_enabled: bool

    def warning(self, message: str, exc: BaseException | None = None) -> None: ...

    def error(self, message: str, exc: BaseException | None = None) -> None: ...

    def event(self, name: str, payload: Mapping[str, Any]) -> None: ...


class NullEmitter:
    """Emitter that ignores every diagnostic."""

    debug_enabled: bool = False

    def warning(self, message: str, exc: BaseException | None = None) -> None:
        return

    def error(self, message: str, exc: BaseException | None = None) -> None:
        return

    def event(self, name: str, payload: Mapping[str, Any]) -> None:
        return


class LoggingEmitter:
    """Emitter that forwards diagnostics to the standard logging module."""

    def __init__(
        self, *, logger_obj: logging.Logger | None = None, debug_enabled: bool = False
    ) -> None:
        self._logger = logger_obj or logger
        self.debug_enabled = debug_enabled

    def warning(self, message: str, exc: BaseException | None = None) -> None:
        if exc is not None:
            self._logger.warning(message, exc_info=exc)
        else:
            self._logger.warning(message)

    def error(self, message: str, exc: BaseException | None = None) -> None:
        if exc is not None:
            self._logger.error(message, exc_info=exc)
        else:
            self._logger.error(message)

    def event(self, name: str, payload: Mapping[str, Any]) -> None:
        message = format_event_message(name, payload)
        if message:
            self._logger.info(message)
            return
        self._logger.debug("diagnostic event %s: %s", name, dict(payload))


def _namespace_list(data: Mapping[str, Any]) -> str:
    namespaces = data.get("namespaces") or []
    if isinstance(namespaces, str):
        return namespaces
    return ", ".join(str(item) for item in namespaces) or "<none>"


def format_event_message(name: str, payload: Mapping[str, Any]) -> str | None:
    """Return a human-friendly summary for selected diagnostic events."""
    data = dict(payload)

    if name == "fragment_buffered":
        pending = data.get("pending")
        suffix = f" ({pending} pending)" if pending is not None else ""
        return f"Buffered fragments: {_namespace_list(data)}{suffix}"

    if name == "fragment_delivered":
        return f"Delivered fragments: {_namespace_list(data)}"

    if name == "consumer_attached":
        if data.get("replaced"):
            return "Replaced registry consumer"
        delivered = data.get("delivered") or 0
        return f"Attached registry consumer ({delivered} pending namespaces flushed)"

    if name == "fragment_loaded":
        path = data.get("path") or "<unknown>"
        kind = data.get("kind") or "fragment"
        return f"Loaded {kind} fragment {path}: {_namespace_list(data)}"

    return None


__all__ = [
    "DiagnosticEmitter",
    "LoggingEmitter",
    "NullEmitter",
    "format_event_message",
]
