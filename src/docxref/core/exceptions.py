"""Exception hierarchy for fragment loading and configuration."""

from __future__ import annotations

from pathlib import Path


class DocxrefError(RuntimeError):
    """Base exception for docxref failures."""


class FragmentLoadError(DocxrefError):
    """Raised when an index fragment file cannot be read or decoded."""

    def __init__(self, message: str, *, path: Path | None = None) -> None:
        self.path = path
        if path is not None:
            message = f"{path}: {message}"
        super().__init__(message)


class UnrecognisedFragmentError(FragmentLoadError):
    """Raised when a file does not match any known fragment layout."""


class ConfigError(DocxrefError):
    """Raised when a configuration file is unreadable or invalid."""


def exception_messages(exc: BaseException) -> list[str]:
    """Return the collected message chain for an exception and its causes."""
    messages: list[str] = []
    visited: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in visited:
        visited.add(id(current))
        text = str(current).strip()
        if text:
            first_line = text.splitlines()[0].strip()
            if first_line:
                messages.append(first_line)
        current = current.__cause__ or current.__context__
    return messages


def exception_hint(exc: BaseException) -> str | None:
    """Return the most specific message available for an exception chain."""
    messages = exception_messages(exc)
    return messages[-1] if messages else None


__all__ = [
    "ConfigError",
    "DocxrefError",
    "FragmentLoadError",
    "UnrecognisedFragmentError",
    "exception_hint",
    "exception_messages",
]
