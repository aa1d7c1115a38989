# pluggable logger (debug/info + key/value fields)

from __future__ import annotations
import sys
from typing import Any, NamedTuple, Protocol, TextIO


class Field(NamedTuple):
    key: str
    value: Any


class Logger(Protocol):
    def debug(self, msg: str, *fields: Field) -> None: ...

    def info(self, msg: str, *fields: Field) -> None: ...


class NoopLogger:
    """Default logger, discards everything."""

    def debug(self, msg: str, *fields: Field) -> None:
        pass

    def info(self, msg: str, *fields: Field) -> None:
        pass


class StderrLogger:
    """
    Prints tagged lines like `[PHOTOFUNIA][INFO] got image key key=abc`.
    Debug lines are only printed when `debug=True`.
    """

    def __init__(self, debug: bool = False, stream: TextIO | None = None):
        self.debug_enabled = debug
        self.stream = stream

    def _emit(self, level: str, msg: str, fields) -> None:
        line = f"[PHOTOFUNIA][{level}] {msg}"
        if fields:
            line += " " + " ".join(f"{f.key}={f.value}" for f in fields)
        print(line, file=self.stream or sys.stderr)

    def debug(self, msg: str, *fields: Field) -> None:
        if self.debug_enabled:
            self._emit("DEBUG", msg, fields)

    def info(self, msg: str, *fields: Field) -> None:
        self._emit("INFO", msg, fields)


def logger_from_settings(settings) -> Logger:
    if settings.LOG_TO_STDERR:
        return StderrLogger(debug=settings.LOG_DEBUG)
    return NoopLogger()
