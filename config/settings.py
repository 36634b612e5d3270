from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from typing import Any

from .public_config import PublicConfig

_PLATFORMS = {"android", "ios"}


class ConfigError(RuntimeError):
    pass


@dataclass(frozen=True, slots=True)
class Settings:
    """
    Settings view (dot-access onto the public config).
    """

    public: PublicConfig

    def __getattr__(self, name: str) -> Any:
        return getattr(self.public, name)

    def platform_name(self) -> str:
        return str(self.public.platform or "").strip().lower()


def _validate(s: Settings) -> None:
    plat = s.platform_name()
    if plat not in _PLATFORMS:
        raise ConfigError(
            f"Unsupported LOCALNOTIFY_PLATFORM={plat!r}; expected one of: "
            + ", ".join(sorted(_PLATFORMS))
        )
    if not str(s.public.service_name or "").strip():
        raise ConfigError("LOCALNOTIFY_SERVICE must not be empty")


def get_safe_config_report() -> dict[str, Any]:
    """
    Deterministic config report (paths are stringified for stable JSON output).
    """
    s = get_settings()
    out: dict[str, Any] = {}
    for k, v in s.public.model_dump().items():
        out[k] = str(v) if hasattr(v, "__fspath__") else v
    out["platform"] = s.platform_name()
    return {"public": out}


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    s = Settings(public=PublicConfig())
    _validate(s)
    return s


class _SettingsProxy:
    """
    Lazy proxy so tests can set env vars before first access.
    """

    def __getattr__(self, name: str) -> Any:
        return getattr(get_settings(), name)

    def reload(self) -> None:
        get_settings.cache_clear()

    def snapshot(self) -> Settings:
        return get_settings()


# Single access point
SETTINGS = _SettingsProxy()
