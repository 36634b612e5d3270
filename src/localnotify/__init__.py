from __future__ import annotations

from .client import LocalNotification
from .notify.base import NotificationOptions, Platform
from .notify.bridge import BridgeCaller, LoggingBridge, NativeBridge
from .notify.defaults import ANDROID_DEFAULTS, IOS_DEFAULTS, defaults_for
from .notify.diagnostics import DiagnosticSink, LogSink, RecordingSink
from .notify.events import EventRouter
from .notify.normalize import (
    convert_ids,
    convert_properties,
    get_value_for,
    merge_with_defaults,
)

__all__ = [
    "ANDROID_DEFAULTS",
    "IOS_DEFAULTS",
    "BridgeCaller",
    "DiagnosticSink",
    "EventRouter",
    "LocalNotification",
    "LogSink",
    "LoggingBridge",
    "NativeBridge",
    "NotificationOptions",
    "Platform",
    "RecordingSink",
    "convert_ids",
    "convert_properties",
    "defaults_for",
    "get_value_for",
    "merge_with_defaults",
]
