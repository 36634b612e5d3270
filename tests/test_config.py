from __future__ import annotations

import pytest

from localnotify.config import ConfigError, get_settings
from localnotify.notify.base import Platform
from localnotify.notify.defaults import ANDROID_DEFAULTS, IOS_DEFAULTS, defaults_for


def test_settings_defaults() -> None:
    s = get_settings()
    assert s.platform_name() == "android"
    assert s.service_name == "LocalNotification"


def test_settings_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LOCALNOTIFY_PLATFORM", " iOS ")
    monkeypatch.setenv("LOCALNOTIFY_SERVICE", "Notifier")
    get_settings.cache_clear()
    s = get_settings()
    assert s.platform_name() == "ios"
    assert s.service_name == "Notifier"


def test_empty_service_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LOCALNOTIFY_SERVICE", " ")
    get_settings.cache_clear()
    with pytest.raises(ConfigError):
        get_settings()


def test_defaults_tables() -> None:
    assert defaults_for("android") is ANDROID_DEFAULTS
    assert defaults_for(Platform.IOS) is IOS_DEFAULTS
    assert set(ANDROID_DEFAULTS) - set(IOS_DEFAULTS) == {
        "icon",
        "smallIcon",
        "ongoing",
        "autoClear",
        "led",
    }
    with pytest.raises(TypeError):
        ANDROID_DEFAULTS["id"] = 1  # type: ignore[index]
    with pytest.raises(ValueError):
        Platform.parse("symbian")
