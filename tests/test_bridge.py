from __future__ import annotations

from localnotify.notify.bridge import (
    BridgeCall,
    BridgeCaller,
    LoggingBridge,
    create_callback_fn,
    normalize_args,
)


def test_exec_wraps_single_value(bridge) -> None:
    BridgeCaller(bridge, service="LocalNotification").exec("foo", 5, lambda *a: None)
    assert bridge.calls == [
        BridgeCall(service="LocalNotification", action="foo", args=[5], has_callback=True)
    ]


def test_exec_passes_sequences_through(bridge) -> None:
    caller = BridgeCaller(bridge)
    caller.exec("foo", [1, 2], lambda *a: None)
    caller.exec("bar", (3, 4))
    assert bridge.calls[0].args == [1, 2]
    assert bridge.calls[1].args == [3, 4]


def test_exec_absent_args_become_empty(bridge) -> None:
    caller = BridgeCaller(bridge)
    caller.exec("foo", None, lambda *a: None)
    caller.exec("foo")
    assert [c.args for c in bridge.calls] == [[], []]


def test_list_is_handed_over_unchanged() -> None:
    received: list[object] = []

    class _Bridge:
        def exec(self, success, error, service, action, args) -> None:
            received.append(args)

    payload = [1, 2]
    BridgeCaller(_Bridge(), service="svc").exec("foo", payload)
    assert received[0] is payload


def test_service_name_from_settings(bridge, monkeypatch) -> None:
    from localnotify.config import get_settings

    monkeypatch.setenv("LOCALNOTIFY_SERVICE", "CustomService")
    get_settings.cache_clear()
    BridgeCaller(bridge).exec("ping")
    assert bridge.calls[0].service == "CustomService"


def test_non_callable_callback_is_dropped(bridge) -> None:
    BridgeCaller(bridge).exec("foo", 1, "nope")
    assert bridge.calls[0].has_callback is False
    assert create_callback_fn(None) is None
    assert create_callback_fn(123) is None


def test_callback_runs_with_scope() -> None:
    got: list[tuple[object, int]] = []
    scope = object()

    def cb(self, value: int) -> None:
        got.append((self, value))

    bridge = LoggingBridge(replies={"isPresent": (True,)})
    BridgeCaller(bridge).exec("isPresent", [1], lambda present: got.append((None, present)))
    create_callback_fn(cb, scope)(7)
    assert got == [(None, True), (scope, 7)]


def test_normalize_args_truthiness() -> None:
    assert normalize_args(0) == []
    assert normalize_args("") == []
    assert normalize_args("x") == ["x"]
    assert normalize_args({"id": 1}) == [{"id": 1}]


def test_nested_exec_restores_outer_action() -> None:
    from localnotify.utils.log import bridge_action_var

    seen: list[tuple[str, str | None, str | None]] = []

    class _Bridge:
        def exec(self, success, error, service, action, args) -> None:
            before = bridge_action_var.get()
            if success is not None:
                success(True)
            seen.append((action, before, bridge_action_var.get()))

    caller = BridgeCaller(_Bridge(), service="svc")
    caller.exec("registerPermission", None, lambda granted: caller.exec("schedule", [{"id": 1}]))
    assert seen == [
        ("schedule", "schedule", "schedule"),
        ("registerPermission", "registerPermission", "registerPermission"),
    ]
    assert bridge_action_var.get() is None
