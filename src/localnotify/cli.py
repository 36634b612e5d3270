from __future__ import annotations

import json
from dataclasses import asdict
from typing import Any

import click

from localnotify.client import LocalNotification
from localnotify.config import get_safe_config_report
from localnotify.notify.bridge import LoggingBridge
from localnotify.notify.diagnostics import RecordingSink
from localnotify.utils.log import set_log_level, setup_logging

_PLATFORM = click.Choice(["android", "ios"], case_sensitive=False)


def _parse_options(json_text: str | None, pairs: tuple[str, ...]) -> dict[str, Any]:
    opts: dict[str, Any] = {}
    if json_text:
        try:
            loaded = json.loads(json_text)
        except ValueError as ex:
            raise click.BadParameter(f"invalid JSON: {ex}", param_hint="--json") from ex
        if not isinstance(loaded, dict):
            raise click.BadParameter("expected a JSON object", param_hint="--json")
        opts.update(loaded)
    for pair in pairs:
        key, sep, raw = pair.partition("=")
        if not sep or not key.strip():
            raise click.BadParameter(f"expected key=value, got {pair!r}", param_hint="--set")
        # JSON literals (numbers, true/false, null, objects) are decoded; anything else is a string.
        try:
            value = json.loads(raw)
        except ValueError:
            value = raw
        opts[key.strip()] = value
    return opts


def _echo_warnings(sink: RecordingSink) -> None:
    for d in sink.records:
        click.echo(f"warning: {d.code} {json.dumps(d.fields, sort_keys=True)}", err=True)


def _options_args(fn):
    fn = click.option(
        "--set",
        "pairs",
        multiple=True,
        metavar="KEY=VALUE",
        help="Option value (repeatable); JSON literals are decoded.",
    )(fn)
    fn = click.option("--json", "json_text", default=None, help="Options as a JSON object.")(fn)
    fn = click.option(
        "--platform",
        type=_PLATFORM,
        default=None,
        help="Platform defaults to apply (default: LOCALNOTIFY_PLATFORM).",
    )(fn)
    return fn


@click.group(help="localnotify CLI (option normalization + dry-run bridge calls)")
@click.option("--log-level", default=None, help="Override LOCALNOTIFY_LOG_LEVEL for this run.")
def cli(log_level: str | None) -> None:
    setup_logging()
    if log_level:
        set_log_level(log_level)


@cli.command("normalize", help="Print options as they would cross the native bridge.")
@_options_args
def normalize(platform: str | None, json_text: str | None, pairs: tuple[str, ...]) -> None:
    opts = _parse_options(json_text, pairs)
    sink = RecordingSink()
    client = LocalNotification(LoggingBridge(), platform, sink=sink)
    props = client.prepare(opts)
    _echo_warnings(sink)
    click.echo(json.dumps(props, indent=2))


@cli.command("schedule", help="Schedule through a recording bridge and print the bridge calls.")
@_options_args
def schedule(platform: str | None, json_text: str | None, pairs: tuple[str, ...]) -> None:
    opts = _parse_options(json_text, pairs)
    sink = RecordingSink()
    bridge = LoggingBridge(replies={"registerPermission": (True,)})
    client = LocalNotification(bridge, platform, sink=sink)
    client.schedule(opts)
    _echo_warnings(sink)
    click.echo(json.dumps([asdict(c) for c in bridge.calls], indent=2))


@cli.command("show-config", help="Print the effective configuration.")
def show_config() -> None:
    click.echo(json.dumps(get_safe_config_report(), indent=2, sort_keys=True))


if __name__ == "__main__":  # pragma: no cover
    cli()
