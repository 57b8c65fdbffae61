"""
Structured logging for hookguard, filtered by channel and verbosity.

Channels: RUNNER (runs and outcomes), HOOK (hook decisions), CONTENT
(store reads), CONFIG (config loading), SYSTEM (CLI failures).

Verbosity: silent < info < verbose < debug. Warnings and errors are shown
at every level except silent.

Environment defaults, overridden by explicit arguments:
- HOOKGUARD_LOG_LEVEL
- HOOKGUARD_LOG_FORMAT (console/json)
- HOOKGUARD_LOG_CHANNELS (comma-separated)

Output goes to stderr; stdout belongs to command output.
"""

import logging
import os
import sys
from datetime import datetime
from enum import Enum, IntEnum
from typing import Any, Iterable, Optional, Union

import structlog


class LogLevel(IntEnum):
    SILENT = 0
    INFO = 1
    VERBOSE = 2
    DEBUG = 3

    @classmethod
    def from_string(cls, s: str) -> "LogLevel":
        """Parse a level name; unknown names mean INFO."""
        try:
            return cls[s.upper()]
        except KeyError:
            return cls.INFO


class LogChannel(str, Enum):
    RUNNER = "RUNNER"
    HOOK = "HOOK"
    CONTENT = "CONTENT"
    CONFIG = "CONFIG"
    SYSTEM = "SYSTEM"

    @classmethod
    def from_string(cls, s: str) -> Optional["LogChannel"]:
        try:
            return cls(s.strip().upper())
        except ValueError:
            return None


_STDLIB_LEVELS = {
    LogLevel.SILENT: logging.CRITICAL + 10,
    LogLevel.INFO: logging.INFO,
    LogLevel.VERBOSE: logging.DEBUG,
    LogLevel.DEBUG: logging.DEBUG,
}

_state = {
    "level": LogLevel.INFO,
    "format": "console",
    "channels": frozenset(LogChannel),
    "configured": False,
}


def _parse_channels(channels: Iterable[Union[LogChannel, str]]) -> frozenset:
    parsed = set()
    for ch in channels:
        if isinstance(ch, str):
            ch = LogChannel.from_string(ch)
        if ch is not None:
            parsed.add(ch)
    return frozenset(parsed)


def configure_logging(
    level: Union[LogLevel, str, None] = None,
    format: Optional[str] = None,
    channels: Optional[Iterable[Union[LogChannel, str]]] = None,
    force: bool = False,
) -> None:
    """
    Configure structlog and the stdlib root logger.

    Only the first call takes effect unless `force` is set. An empty or
    unparseable HOOKGUARD_LOG_CHANNELS enables every channel.
    """
    if _state["configured"] and not force:
        return

    if level is None:
        level = os.environ.get("HOOKGUARD_LOG_LEVEL", "info")
    if isinstance(level, str):
        level = LogLevel.from_string(level)

    format = format or os.environ.get("HOOKGUARD_LOG_FORMAT", "console")

    if channels is None:
        enabled = _parse_channels(os.environ.get("HOOKGUARD_LOG_CHANNELS", "").split(","))
        enabled = enabled or frozenset(LogChannel)
    else:
        enabled = _parse_channels(channels)

    _state.update(level=level, format=format, channels=enabled, configured=True)

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=_STDLIB_LEVELS[level],
        force=True,
    )

    if format == "json":
        renderer = [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    else:
        renderer = [structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())]

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            *renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )


class ChannelLogger:
    """A structlog logger that drops events its channel or level filters out."""

    def __init__(self, channel: LogChannel, name: Optional[str] = None, **bound: Any):
        self.channel = channel
        self._logger = structlog.get_logger(name or f"hookguard.{channel.value.lower()}")
        self._bound = {"channel": channel.value, **bound}

    def enabled_for(self, level: LogLevel) -> bool:
        return self.channel in _state["channels"] and _state["level"] >= level

    def _emit(self, method: str, event: str, fields: dict) -> None:
        getattr(self._logger, method)(event, **self._bound, **fields)

    def info(self, event: str, **fields) -> None:
        if self.enabled_for(LogLevel.INFO):
            self._emit("info", event, fields)

    def verbose(self, event: str, **fields) -> None:
        if self.enabled_for(LogLevel.VERBOSE):
            self._emit("debug", event, fields)

    def debug(self, event: str, **fields) -> None:
        if self.enabled_for(LogLevel.DEBUG):
            self._emit("debug", event, fields)

    # Warnings and errors ignore the channel filter.
    def warning(self, event: str, **fields) -> None:
        if _state["level"] > LogLevel.SILENT:
            self._emit("warning", event, fields)

    def error(self, event: str, **fields) -> None:
        if _state["level"] > LogLevel.SILENT:
            self._emit("error", event, fields)


def get_logger(channel: Union[LogChannel, str] = LogChannel.SYSTEM) -> ChannelLogger:
    configure_logging()
    if isinstance(channel, str):
        channel = LogChannel.from_string(channel) or LogChannel.SYSTEM
    return ChannelLogger(channel)


def get_hook_logger(hook_name: str) -> ChannelLogger:
    """HOOK channel logger tagging every event with the hook name."""
    configure_logging()
    return ChannelLogger(LogChannel.HOOK, name=f"hookguard.hooks.{hook_name}", hook=hook_name)


class RunLogger:
    """
    Logs one hook run.

    The request ID is bound into structlog's context variables for the
    duration of the run, so every event logged meanwhile carries it.
    """

    def __init__(self, request_id: str):
        self.request_id = request_id
        self._log = get_logger(LogChannel.RUNNER)
        self._started = datetime.now()
        structlog.contextvars.bind_contextvars(request_id=request_id)

    def run_start(self, files: int, hooks: list[str]) -> None:
        self._log.verbose("run_started", files=files, hooks=hooks)

    def file_skipped(self, path: str, reason: str) -> None:
        self._log.debug("file_skipped", path=path, reason=reason)

    def file_rejected(self, hook_name: str, path: str, description: str) -> None:
        self._log.info("file_rejected", hook_name=hook_name, path=path, description=description)

    def hook_error(self, hook_name: str, path: str, error: Exception) -> None:
        self._log.error(
            "hook_failed",
            hook_name=hook_name,
            path=path,
            error=str(error),
            error_type=type(error).__name__,
        )

    def elapsed_ms(self) -> float:
        return round((datetime.now() - self._started).total_seconds() * 1000, 2)

    def run_complete(self, status: str, **counts: Any) -> None:
        self._log.info("run_complete", status=status, total_duration_ms=self.elapsed_ms(), **counts)
        structlog.contextvars.unbind_contextvars("request_id")


def get_current_config() -> dict:
    """Snapshot of the active configuration, for tests and diagnostics."""
    return {
        "level": _state["level"].name,
        "format": _state["format"],
        "channels": sorted(ch.value for ch in _state["channels"]),
    }
