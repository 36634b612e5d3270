from __future__ import annotations

import types
from collections.abc import Callable
from typing import Any

from localnotify.utils.log import logger

from .diagnostics import DiagnosticSink, default_sink

Listener = tuple[Callable[..., Any], Any]


def bind(callback: Callable[..., Any], scope: Any = None) -> Callable[..., Any]:
    """Bind `callback` to `scope` (passed as its first argument); unbound when scope is None."""
    if scope is None:
        return callback
    return types.MethodType(callback, scope)


class EventRouter:
    """
    Listener registry: event name -> ordered (callback, scope) registrations.
    """

    def __init__(self, *, sink: DiagnosticSink | None = None) -> None:
        self._listeners: dict[str, list[Listener]] = {}
        self._sink = sink or default_sink()

    def on(self, event: str, callback: Callable[..., Any], scope: Any = None) -> None:
        if not callable(callback):
            return
        self._listeners.setdefault(str(event), []).append((callback, scope))

    def un(self, event: str, callback: Callable[..., Any]) -> None:
        items = self._listeners.get(str(event))
        if not items:
            return
        kept = [(fn, scope) for fn, scope in items if fn != callback]
        if kept:
            self._listeners[str(event)] = kept
        else:
            self._listeners.pop(str(event), None)

    def listeners(self, event: str) -> tuple[Listener, ...]:
        return tuple(self._listeners.get(str(event), ()))

    def has_listeners(self, event: str) -> bool:
        return bool(self._listeners.get(str(event)))

    def events(self) -> list[str]:
        return list(self._listeners)

    def fire_event(self, event: str, *args: Any) -> int:
        """
        Invoke every listener of `event` in registration order.

        Iterates a snapshot: registrations changed by a listener apply to the
        next fire. A failing listener is logged and the rest still run.
        Returns the number of listeners invoked.
        """
        snapshot = self.listeners(event)
        for fn, scope in snapshot:
            try:
                bind(fn, scope)(*args)
            except Exception as ex:
                logger.exception("listener_failed", notify_event=str(event))
                self._sink.warn(
                    "listener_failed", notify_event=str(event), error=str(ex)[:200]
                )
        return len(snapshot)
