"""
Option normalization: alias resolution, defaults merge and bridge-safe coercion.

`merge_with_defaults` and `convert_properties` both work in place on the
caller's dict and return it. Neither raises for bad input; anomalies fall back
to defaults and are reported to the diagnostic sink.
"""

from __future__ import annotations

import json
import math
from collections.abc import Callable, Iterable, Mapping
from datetime import date, datetime, time, timezone
from typing import Any

from .base import (
    AT_ALIASES,
    AUTO_CLEAR_ALIASES,
    DATA_ALIASES,
    EXPLICIT_NONE_KEYS,
    TEXT_ALIASES,
)
from .defaults import IOS_DEFAULTS, Defaults
from .diagnostics import DiagnosticSink, default_sink

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def get_value_for(options: Mapping[str, Any], *keys: str) -> Any:
    """Value of the first key present in `options` (argument order), else None."""
    for key in keys:
        if key in options:
            return options[key]
    return None


def merge_with_defaults(
    options: dict[str, Any],
    defaults: Defaults,
    *,
    sink: DiagnosticSink | None = None,
    now: Clock | None = None,
) -> dict[str, Any]:
    """
    Merge caller options with the platform defaults.

    Afterwards `options` holds exactly the defaults' key set, in the defaults'
    order. Unknown keys are removed with an `unknown_option_key` warning.
    """
    sink = sink or default_sink()
    supplied = set(options)
    if "json" in supplied:
        supplied.add("data")

    options["at"] = get_value_for(options, *AT_ALIASES)
    options["text"] = get_value_for(options, *TEXT_ALIASES)
    options["data"] = get_value_for(options, *DATA_ALIASES)

    if "autoClear" in defaults:
        options["autoClear"] = get_value_for(options, *AUTO_CLEAR_ALIASES)

    # An ongoing notification cannot auto-clear.
    if options.get("autoClear") is not True and options.get("ongoing"):
        options["autoClear"] = False

    if options.get("at") is None:
        options["at"] = (now or utc_now)()

    for key, default in defaults.items():
        if options.get(key) is not None:
            continue
        if key in EXPLICIT_NONE_KEYS and key in supplied:
            options[key] = None
        else:
            options[key] = default

    for key in list(options):
        if key not in defaults:
            del options[key]
            sink.warn("unknown_option_key", key=str(key))

    ordered = {key: options[key] for key in defaults}
    options.clear()
    options.update(ordered)
    return options


def is_numeric(value: Any) -> bool:
    if isinstance(value, bool):
        return True
    if isinstance(value, (int, float)):
        try:
            return math.isfinite(value)
        except OverflowError:
            return False
    if isinstance(value, str):
        try:
            return math.isfinite(float(value.strip()))
        except ValueError:
            return False
    return False


def to_number(value: Any) -> int | float:
    """Numeric coercion; integral values come back as int. Caller checks `is_numeric`."""
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    f = float(value.strip()) if isinstance(value, str) else float(value)
    return int(f) if f.is_integer() else f


def _epoch_millis(value: Any) -> float | None:
    if isinstance(value, datetime):
        return value.timestamp() * 1000.0
    if isinstance(value, date):
        return datetime.combine(value, time()).timestamp() * 1000.0
    if isinstance(value, bool):
        return None
    if is_numeric(value):
        return float(to_number(value))
    return None


def _round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


def _describe(value: Any) -> str:
    try:
        return repr(value)[:200]
    except ValueError:
        # ints beyond the str conversion digit limit
        return f"<{type(value).__name__}>"


def _finite(obj: Any) -> Any:
    # NaN/inf become null, as JSON.stringify does.
    if isinstance(obj, float) and not math.isfinite(obj):
        return None
    if isinstance(obj, Mapping):
        return {k: _finite(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [_finite(v) for v in obj]
    return obj


def _json_default(obj: Any) -> Any:
    if isinstance(obj, (datetime, date)):
        return obj.isoformat()
    if isinstance(obj, (set, frozenset)):
        return _finite(list(obj))
    return _describe(obj)


def convert_properties(
    options: dict[str, Any],
    defaults: Defaults | None = None,
    *,
    sink: DiagnosticSink | None = None,
    now: Clock | None = None,
) -> dict[str, Any]:
    """
    Coerce option values into the primitive types the native side expects.

    - id, badge: numbers; non-numeric values fall back to the default (+ warning)
    - title, text: strings
    - at: epoch seconds (int, rounded half up)
    - data: JSON string for structured values
    """
    sink = sink or default_sink()
    defaults = defaults if defaults is not None else IOS_DEFAULTS

    if options.get("id"):
        if is_numeric(options["id"]):
            options["id"] = to_number(options["id"])
        else:
            sink.warn("invalid_notification_id", value=_describe(options["id"]))
            options["id"] = defaults["id"]

    for key in ("title", "text"):
        if options.get(key):
            try:
                options[key] = str(options[key])
            except ValueError:
                sink.warn("invalid_text", key=key, value=_describe(options[key]))
                options[key] = defaults.get(key, "")

    if options.get("badge"):
        if is_numeric(options["badge"]):
            options["badge"] = to_number(options["badge"])
        else:
            sink.warn("invalid_badge_number", value=_describe(options["badge"]))
            options["badge"] = defaults["badge"]

    if options.get("at"):
        millis = _epoch_millis(options["at"])
        if millis is None:
            sink.warn("invalid_trigger_time", value=_describe(options["at"]))
            millis = (now or utc_now)().timestamp() * 1000.0
        options["at"] = _round_half_up(millis / 1000.0)

    data = options.get("data")
    if data is not None and not isinstance(data, (str, int, float, bool)):
        try:
            options["data"] = json.dumps(
                _finite(data), default=_json_default, separators=(",", ":"), allow_nan=False
            )
        except (TypeError, ValueError) as ex:
            sink.warn("invalid_data", error=str(ex)[:200])
            options["data"] = None

    return options


def convert_ids(ids: Iterable[Any]) -> list[int | float]:
    """Numeric ids, order and length preserved; non-numeric entries become NaN."""
    return [to_number(i) if is_numeric(i) else math.nan for i in ids]
