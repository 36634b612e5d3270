"""
Settings shim.

The canonical config lives in the repo-level `config/` package:
  - `config/public_config.py` (env-backed defaults)
  - `config/settings.py` exposes `get_settings()` and `SETTINGS`

Import through here: `from localnotify.config import get_settings`.
"""

from __future__ import annotations

from config.settings import ConfigError as ConfigError
from config.settings import Settings as Settings
from config.settings import get_safe_config_report as get_safe_config_report
from config.settings import get_settings as get_settings
