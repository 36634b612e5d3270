"""
Settings layer for localnotify.

`config/public_config.py` holds the env-backed fields; `config/settings.py`
exposes `get_settings()` and the `SETTINGS` proxy.
"""
