from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any, Protocol

from localnotify.config import get_settings
from localnotify.utils.log import bridge_action_var, logger

from .events import bind

Callback = Callable[..., Any]


class NativeBridge(Protocol):
    """
    Cross-boundary call into native code (Cordova calling convention).
    Returns immediately; replies arrive later through `success`.
    """

    def exec(
        self,
        success: Callback | None,
        error: Callback | None,
        service: str,
        action: str,
        args: list[Any],
    ) -> None: ...


def create_callback_fn(callback: Any, scope: Any = None) -> Callback | None:
    """Callback bound to `scope`, or None when `callback` is not callable."""
    if not callable(callback):
        return None
    fn = bind(callback, scope)

    def _scoped(*args: Any) -> None:
        fn(*args)

    return _scoped


def normalize_args(args: Any) -> list[Any]:
    """Positional bridge arguments: lists pass through, one truthy value is wrapped, else []."""
    if isinstance(args, list):
        return args
    if isinstance(args, tuple):
        return list(args)
    if args:
        return [args]
    return []


class BridgeCaller:
    """
    Packages positional arguments and a scoped callback for the native bridge.
    Actions are not validated here; unknown actions are the native side's concern.
    """

    def __init__(self, bridge: NativeBridge, *, service: str | None = None) -> None:
        self.bridge = bridge
        self.service = service or str(get_settings().service_name)

    def exec(
        self,
        action: str,
        args: Any = None,
        callback: Any = None,
        scope: Any = None,
    ) -> None:
        fn = create_callback_fn(callback, scope)
        params = normalize_args(args)
        token = bridge_action_var.set(str(action))
        try:
            logger.debug("bridge_exec", service=self.service, argc=len(params))
            self.bridge.exec(fn, None, self.service, action, params)
        finally:
            bridge_action_var.reset(token)


@dataclass(frozen=True, slots=True)
class BridgeCall:
    service: str
    action: str
    args: list[Any]
    has_callback: bool


class LoggingBridge:
    """
    Bridge with no native side: records and logs every call.

    `replies` maps an action name to the positional arguments its success
    callback receives (answered synchronously). Actions without a reply are
    recorded only.
    """

    def __init__(self, replies: Mapping[str, tuple[Any, ...]] | None = None) -> None:
        self.calls: list[BridgeCall] = []
        self.replies = dict(replies or {})

    def exec(
        self,
        success: Callback | None,
        error: Callback | None,
        service: str,
        action: str,
        args: list[Any],
    ) -> None:
        self.calls.append(
            BridgeCall(service=service, action=action, args=list(args), has_callback=success is not None)
        )
        logger.debug("bridge_call", service=service, action=action, argc=len(args))
        if success is not None and action in self.replies:
            success(*self.replies[action])

    def actions(self) -> list[str]:
        return [c.action for c in self.calls]
