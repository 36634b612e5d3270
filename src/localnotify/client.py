from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from localnotify.config import Settings, get_settings
from localnotify.notify.base import Platform
from localnotify.notify.bridge import BridgeCaller, NativeBridge, create_callback_fn
from localnotify.notify.defaults import Defaults, defaults_for, with_overrides
from localnotify.notify.diagnostics import DiagnosticSink, default_sink
from localnotify.notify.events import EventRouter
from localnotify.notify.normalize import (
    Clock,
    convert_ids,
    convert_properties,
    merge_with_defaults,
    utc_now,
)
from localnotify.utils.log import logger


def _as_list(value: Any) -> list[Any]:
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


class LocalNotification:
    """
    Local-notification plugin client.

    Owns its defaults table, listener registry and bridge caller; nothing is
    shared at module level. Construction announces `deviceready` to the
    native side once.
    """

    def __init__(
        self,
        bridge: NativeBridge,
        platform: Platform | str | None = None,
        *,
        sink: DiagnosticSink | None = None,
        clock: Clock | None = None,
        settings: Settings | None = None,
    ) -> None:
        if settings is None:
            settings = get_settings()
        if platform is None:
            platform = settings.platform_name()
        self.platform = Platform.parse(platform)
        self.sink = sink or default_sink()
        self.clock = clock or utc_now
        self._defaults = defaults_for(self.platform)
        self.router = EventRouter(sink=self.sink)
        self.caller = BridgeCaller(bridge, service=str(settings.service_name))
        self.caller.exec("deviceready")

    # --- defaults ---
    def get_defaults(self) -> Defaults:
        return self._defaults

    def set_defaults(self, new_defaults: Mapping[str, Any]) -> None:
        self._defaults = with_overrides(self._defaults, new_defaults, self.sink)

    # --- normalization ---
    def prepare(self, options: Mapping[str, Any]) -> dict[str, Any]:
        """Copy of `options` merged with defaults and converted for the bridge."""
        props = dict(options)
        merge_with_defaults(props, self._defaults, sink=self.sink, now=self.clock)
        return convert_properties(props, self._defaults, sink=self.sink, now=self.clock)

    def _convert(self, options: Mapping[str, Any]) -> dict[str, Any]:
        return convert_properties(dict(options), self._defaults, sink=self.sink, now=self.clock)

    def _with_permission(self, action: str, send: Callable[[], None]) -> None:
        def _granted(granted: Any = False) -> None:
            if not granted:
                self.sink.warn("permission_denied", action=action)
                return
            send()

        self.register_permission(_granted)

    # --- scheduling ---
    def schedule(self, opts: Any, callback: Any = None, scope: Any = None) -> None:
        def _send() -> None:
            notifications = [self.prepare(o) for o in _as_list(opts)]
            self.caller.exec("schedule", notifications, callback, scope)

        self._with_permission("schedule", _send)

    def update(self, opts: Any, callback: Any = None, scope: Any = None) -> None:
        def _send() -> None:
            notifications = [self._convert(o) for o in _as_list(opts)]
            self.caller.exec("update", notifications, callback, scope)

        self._with_permission("update", _send)

    def clear(self, ids: Any, callback: Any = None, scope: Any = None) -> None:
        self.caller.exec("clear", convert_ids(_as_list(ids)), callback, scope)

    def clear_all(self, callback: Any = None, scope: Any = None) -> None:
        self.caller.exec("clearAll", None, callback, scope)

    def cancel(self, ids: Any, callback: Any = None, scope: Any = None) -> None:
        self.caller.exec("cancel", convert_ids(_as_list(ids)), callback, scope)

    def cancel_all(self, callback: Any = None, scope: Any = None) -> None:
        self.caller.exec("cancelAll", None, callback, scope)

    # --- state queries ---
    def _exec_id(self, action: str, id: Any, callback: Any, scope: Any) -> None:
        # Always a one-element list so id 0 still reaches the native side.
        self.caller.exec(action, convert_ids([id]), callback, scope)

    def is_present(self, id: Any, callback: Any = None, scope: Any = None) -> None:
        self._exec_id("isPresent", id, callback, scope)

    def is_scheduled(self, id: Any, callback: Any = None, scope: Any = None) -> None:
        self._exec_id("isScheduled", id, callback, scope)

    def is_triggered(self, id: Any, callback: Any = None, scope: Any = None) -> None:
        self._exec_id("isTriggered", id, callback, scope)

    def get_all_ids(self, callback: Any = None, scope: Any = None) -> None:
        self.caller.exec("getAllIds", None, callback, scope)

    def get_scheduled_ids(self, callback: Any = None, scope: Any = None) -> None:
        self.caller.exec("getScheduledIds", None, callback, scope)

    def get_triggered_ids(self, callback: Any = None, scope: Any = None) -> None:
        self.caller.exec("getTriggeredIds", None, callback, scope)

    def _get(
        self, single: str, many: str, ids: Any, callback: Any, scope: Any
    ) -> None:
        # `get(callback)` is accepted as shorthand for "all".
        if callable(ids) and callback is None:
            ids, callback = None, ids
        if ids is None:
            ids = []
        if not isinstance(ids, (list, tuple)):
            self._exec_id(single, ids, callback, scope)
            return
        self.caller.exec(many, convert_ids(ids), callback, scope)

    def get(self, ids: Any = None, callback: Any = None, scope: Any = None) -> None:
        self._get("getSingle", "getAll", ids, callback, scope)

    def get_scheduled(self, ids: Any = None, callback: Any = None, scope: Any = None) -> None:
        self._get("getSingleScheduled", "getScheduled", ids, callback, scope)

    def get_triggered(self, ids: Any = None, callback: Any = None, scope: Any = None) -> None:
        self._get("getSingleTriggered", "getTriggered", ids, callback, scope)

    def get_all(self, callback: Any = None, scope: Any = None) -> None:
        self.caller.exec("getAll", None, callback, scope)

    def get_all_scheduled(self, callback: Any = None, scope: Any = None) -> None:
        self.caller.exec("getScheduled", None, callback, scope)

    def get_all_triggered(self, callback: Any = None, scope: Any = None) -> None:
        self.caller.exec("getTriggered", None, callback, scope)

    # --- permissions ---
    def _permission(self, action: str, callback: Any, scope: Any) -> None:
        if self.platform is Platform.ANDROID:
            fn = create_callback_fn(callback, scope)
            if fn is not None:
                fn(True)
            return
        self.caller.exec(action, None, callback, scope)

    def has_permission(self, callback: Any = None, scope: Any = None) -> None:
        self._permission("hasPermission", callback, scope)

    def register_permission(self, callback: Any = None, scope: Any = None) -> None:
        self._permission("registerPermission", callback, scope)

    # --- events ---
    def on(self, event: str, callback: Callable[..., Any], scope: Any = None) -> None:
        self.router.on(event, callback, scope)

    def un(self, event: str, callback: Callable[..., Any]) -> None:
        self.router.un(event, callback)

    def fire_event(self, event: str, *args: Any) -> int:
        return self.router.fire_event(event, *args)

    def dispatch_native_event(self, event: str, *args: Any) -> int:
        """Entry point for native-originated events (schedule, trigger, click, clear, ...)."""
        logger.info("native_event", notify_event=str(event), argc=len(args))
        return self.router.fire_event(event, *args)
