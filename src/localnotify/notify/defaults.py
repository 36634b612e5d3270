from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from .base import Platform
from .diagnostics import DiagnosticSink, default_sink

Defaults = Mapping[str, Any]

_COMMON: dict[str, Any] = {
    "text": "",
    "title": "",
    "sound": "res://platform_default",
    "badge": 0,
    "id": 0,
    "data": None,
    "every": None,
    "at": None,
}

ANDROID_DEFAULTS: Defaults = MappingProxyType(
    {
        "icon": "res://ic_popup_reminder",
        "smallIcon": None,
        "ongoing": False,
        "autoClear": True,
        "led": "FFFFFF",
        **_COMMON,
    }
)

IOS_DEFAULTS: Defaults = MappingProxyType(dict(_COMMON))


def defaults_for(platform: Platform | str | None) -> Defaults:
    """Defaults table (and key whitelist) for a platform."""
    if Platform.parse(platform) is Platform.ANDROID:
        return ANDROID_DEFAULTS
    return IOS_DEFAULTS


def with_overrides(
    defaults: Defaults, overrides: Mapping[str, Any], sink: DiagnosticSink | None = None
) -> Defaults:
    """
    New defaults table with known keys replaced.
    Unknown keys are dropped with a warning; the whitelist never grows.
    """
    sink = sink or default_sink()
    merged = dict(defaults)
    for key, value in (overrides or {}).items():
        if key not in merged:
            sink.warn("unknown_default_key", key=str(key))
            continue
        merged[key] = value
    return MappingProxyType(merged)
