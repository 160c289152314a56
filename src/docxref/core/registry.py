"""Deferred registry merging index fragments delivered by independent producers.

Producers call :func:`register` as soon as their fragments are available while
the consumer calls :func:`attach` whenever it is ready. The registry reconciles
both sides regardless of which one comes first:

* before a consumer attaches, fragments accumulate in a single pending buffer
  (later keys overwrite earlier ones);
* attaching delivers the buffer once and retains the callback;
* once attached, each :meth:`FragmentRegistry.register` call is forwarded to the
  callback with exactly the mapping supplied by that call.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping, Sequence
from contextlib import contextmanager
from dataclasses import dataclass, field
import logging
from threading import RLock
from typing import Any, TypeAlias

from .diagnostics import DiagnosticEmitter, LoggingEmitter


__all__ = [
    "Attached",
    "Fragment",
    "FragmentMapping",
    "FragmentRegistry",
    "MergeCallback",
    "RegistryState",
    "Unattached",
    "attach",
    "get_registry",
    "register",
    "registry_context",
    "reset_registry",
    "set_registry",
]

logger = logging.getLogger(__name__)

Fragment: TypeAlias = Sequence[Any]
FragmentMapping: TypeAlias = Mapping[str, Fragment]
MergeCallback: TypeAlias = Callable[[FragmentMapping], None]


@dataclass(slots=True, frozen=True)
class Unattached:
    """No consumer yet; fragments wait in ``pending`` (``None`` until the first call)."""

    pending: dict[str, Fragment] | None = None


@dataclass(slots=True, frozen=True)
class Attached:
    """A consumer is attached and every registered fragment lives in ``registry``."""

    callback: MergeCallback
    registry: dict[str, Fragment] = field(default_factory=dict)


RegistryState: TypeAlias = Unattached | Attached


class FragmentRegistry:
    """Two-state registry reconciling fragment producers with a single consumer.

    Transitions are reported to ``emitter`` as ``fragment_buffered``,
    ``fragment_delivered`` and ``consumer_attached`` events. The default
    :class:`LoggingEmitter` logs them on this module's logger at INFO level;
    pass a :class:`~docxref.core.diagnostics.NullEmitter` to silence them.
    """

    def __init__(self, *, emitter: DiagnosticEmitter | None = None) -> None:
        self._state: RegistryState = Unattached()
        self._lock = RLock()
        self._emitter: DiagnosticEmitter = emitter or LoggingEmitter(logger_obj=logger)

    @property
    def state(self) -> RegistryState:
        """Return the current state variant."""
        with self._lock:
            return self._state

    @property
    def is_attached(self) -> bool:
        with self._lock:
            return isinstance(self._state, Attached)

    @property
    def has_pending(self) -> bool:
        """Return whether fragments were registered while no consumer was attached."""
        with self._lock:
            state = self._state
            return isinstance(state, Unattached) and state.pending is not None

    def register(self, fragments: FragmentMapping) -> None:
        """Merge ``fragments`` into the registry or the pending buffer.

        Fragments are opaque: nothing is validated and the call never fails on
        its own. Exceptions raised by the consumer callback propagate to the
        caller once the registry state has been updated.
        """
        supplied = dict(fragments)
        with self._lock:
            state = self._state
            if isinstance(state, Attached):
                self._state = Attached(state.callback, {**state.registry, **supplied})
                self._emitter.event("fragment_delivered", {"namespaces": sorted(supplied)})
                state.callback(dict(supplied))
                return

            pending = dict(state.pending or {})
            pending.update(supplied)
            self._state = Unattached(pending)
            self._emitter.event(
                "fragment_buffered",
                {"namespaces": sorted(supplied), "pending": len(pending)},
            )

    def attach(self, on_merge: MergeCallback) -> None:
        """Retain ``on_merge`` as the consumer and flush the pending buffer into it.

        Attaching again replaces the callback without replaying fragments that
        were already delivered.
        """
        with self._lock:
            state = self._state
            if isinstance(state, Attached):
                self._state = Attached(on_merge, state.registry)
                self._emitter.event("consumer_attached", {"replaced": True, "delivered": 0})
                return

            pending = state.pending
            self._state = Attached(on_merge, dict(pending or {}))
            delivered = len(pending) if pending is not None else 0
            self._emitter.event(
                "consumer_attached", {"replaced": False, "delivered": delivered}
            )
            if pending is not None:
                on_merge(dict(pending))

    def pending(self) -> dict[str, Fragment]:
        """Return a copy of the pending buffer (empty once a consumer attached)."""
        with self._lock:
            state = self._state
            if isinstance(state, Unattached) and state.pending is not None:
                return dict(state.pending)
            return {}

    def snapshot(self) -> dict[str, Fragment]:
        """Return a shallow copy of the active registry."""
        with self._lock:
            state = self._state
            if isinstance(state, Attached):
                return dict(state.registry)
            return {}

    def namespaces(self) -> list[str]:
        """Return the namespace keys currently held, pending or active."""
        with self._lock:
            return sorted(self._current())

    def reset(self) -> None:
        """Drop every fragment and detach the consumer."""
        with self._lock:
            self._state = Unattached()

    def _current(self) -> Mapping[str, Fragment]:
        state = self._state
        if isinstance(state, Attached):
            return state.registry
        return state.pending or {}

    def __len__(self) -> int:
        with self._lock:
            return len(self._current())

    def __contains__(self, namespace: object) -> bool:
        with self._lock:
            return namespace in self._current()

    def __repr__(self) -> str:  # pragma: no cover - debugging helper
        with self._lock:
            kind = type(self._state).__name__
            return f"{type(self).__name__}(state={kind}, namespaces={sorted(self._current())})"


_REGISTRY: FragmentRegistry | None = None
_LOCK: RLock = RLock()


def get_registry() -> FragmentRegistry:
    """Return the process-wide registry, creating it on first use."""
    global _REGISTRY
    with _LOCK:
        if _REGISTRY is None:
            _REGISTRY = FragmentRegistry()
        return _REGISTRY


def set_registry(registry: FragmentRegistry) -> FragmentRegistry:
    """Replace the process-wide registry and return it."""
    global _REGISTRY
    with _LOCK:
        _REGISTRY = registry
        return _REGISTRY


def reset_registry() -> FragmentRegistry:
    """Install a fresh, empty process-wide registry."""
    return set_registry(FragmentRegistry())


@contextmanager
def registry_context(registry: FragmentRegistry | None = None) -> Iterator[FragmentRegistry]:
    """Temporarily override the process-wide registry."""
    global _REGISTRY
    with _LOCK:
        previous = _REGISTRY
    current = set_registry(registry or FragmentRegistry())
    try:
        yield current
    finally:
        with _LOCK:
            _REGISTRY = previous


def register(fragments: FragmentMapping) -> None:
    """Register ``fragments`` with the process-wide registry."""
    get_registry().register(fragments)


def attach(on_merge: MergeCallback) -> None:
    """Attach ``on_merge`` as consumer of the process-wide registry."""
    get_registry().attach(on_merge)
