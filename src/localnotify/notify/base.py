from __future__ import annotations

from enum import Enum
from typing import Any, TypedDict


class Platform(str, Enum):
    ANDROID = "android"
    IOS = "ios"

    @classmethod
    def parse(cls, value: str | Platform | None) -> Platform:
        if isinstance(value, Platform):
            return value
        v = str(value or "").strip().lower()
        try:
            return cls(v)
        except ValueError:
            raise ValueError(f"unknown_platform: {value!r}") from None


class NotificationOptions(TypedDict, total=False):
    """
    Every option key any platform accepts.

    The per-platform whitelist is the key set of that platform's defaults table
    (see `notify.defaults`); Android-only keys are dropped elsewhere.
    """

    id: int | float | str
    title: str
    text: str
    at: Any  # datetime | date | epoch millis; epoch seconds after conversion
    every: Any
    badge: int | float | str
    sound: str | None
    data: Any  # JSON string after conversion
    icon: str
    smallIcon: str | None
    ongoing: bool
    autoClear: bool
    led: str


# Canonical key <- candidate keys, in priority order.
AT_ALIASES = ("at", "firstAt", "date")
TEXT_ALIASES = ("text", "message")
DATA_ALIASES = ("data", "json")
AUTO_CLEAR_ALIASES = ("autoClear", "autoCancel")

# Keys whose explicit None is kept rather than replaced by the default.
EXPLICIT_NONE_KEYS = ("data", "sound")
