from __future__ import annotations

import logging
from datetime import datetime, timezone

import pytest
import structlog

from localnotify.config import get_settings
from localnotify.notify.bridge import LoggingBridge
from localnotify.notify.diagnostics import RecordingSink

FIXED_NOW = datetime(2026, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture(autouse=True)
def _test_env(
    tmp_path_factory: pytest.TempPathFactory, monkeypatch: pytest.MonkeyPatch
) -> None:
    root = tmp_path_factory.mktemp("ln_test")
    (root / "logs").mkdir(parents=True, exist_ok=True)
    monkeypatch.setenv("LOCALNOTIFY_LOG_DIR", str(root / "logs"))
    monkeypatch.delenv("LOCALNOTIFY_PLATFORM", raising=False)
    monkeypatch.delenv("LOCALNOTIFY_SERVICE", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def restore_logging() -> None:
    # setup_logging() takes over the root logger; put pytest's handlers back.
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for h in root.handlers:
        if h not in handlers:
            h.close()
    root.handlers[:] = handlers
    root.setLevel(level)
    if hasattr(root, "_localnotify_structlog_configured"):
        del root._localnotify_structlog_configured
    structlog.reset_defaults()


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def bridge() -> LoggingBridge:
    return LoggingBridge()


@pytest.fixture
def clock():
    return lambda: FIXED_NOW
