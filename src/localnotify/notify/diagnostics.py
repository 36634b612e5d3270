from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol


class DiagnosticSink(Protocol):
    """Receiver for non-fatal warnings; normal control flow never aborts."""

    def warn(self, code: str, **fields: Any) -> None: ...


class LogSink:
    """Warnings as structured log events (`code` becomes the event name)."""

    def warn(self, code: str, **fields: Any) -> None:
        from localnotify.utils.log import logger

        logger.warning(code, **fields)


@dataclass(frozen=True, slots=True)
class Diagnostic:
    code: str
    fields: dict[str, Any] = field(default_factory=dict)


class RecordingSink:
    """
    Keeps every warning in memory, optionally forwarding to another sink.
    """

    def __init__(self, forward: DiagnosticSink | None = None) -> None:
        self.records: list[Diagnostic] = []
        self._forward = forward

    def warn(self, code: str, **fields: Any) -> None:
        self.records.append(Diagnostic(code=code, fields=dict(fields)))
        if self._forward is not None:
            self._forward.warn(code, **fields)

    def codes(self) -> list[str]:
        return [r.code for r in self.records]

    def clear(self) -> None:
        self.records.clear()


_DEFAULT = LogSink()


def default_sink() -> DiagnosticSink:
    return _DEFAULT
