"""Logging setup with colored output and OpenTelemetry trace correlation."""

import logging
import sys

from opentelemetry import trace

_RESET = "\033[0m"
_LEVEL_COLORS = {
    logging.DEBUG: "\033[36m",     # cyan
    logging.INFO: "\033[32m",      # green
    logging.WARNING: "\033[33m",   # yellow
    logging.ERROR: "\033[31m",     # red
    logging.CRITICAL: "\033[1;31m",
}

DEFAULT_LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s%(otel_ids)s: %(message)s"
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Loggers that are chatty at INFO when streaming
_NOISY_LOGGERS = ("httpx", "httpcore", "openai")


class OTelColorFormatter(logging.Formatter):
    """
    Formatter that colors the level name and appends the active trace/span ids.

    The ids come from the current OpenTelemetry span, so log lines emitted while
    an operation span is recording can be matched with the exported trace.
    """

    def __init__(self, fmt: str | None = None, datefmt: str | None = None, use_color: bool = True):
        super().__init__(fmt or DEFAULT_LOG_FORMAT, datefmt or DEFAULT_DATE_FORMAT)
        self.use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        span_context = trace.get_current_span().get_span_context()
        if span_context.is_valid:
            record.otel_ids = (
                f" [trace={format(span_context.trace_id, '032x')}"
                f" span={format(span_context.span_id, '016x')}]"
            )
        else:
            record.otel_ids = ""

        levelname = record.levelname
        if self.use_color and record.levelno in _LEVEL_COLORS:
            record.levelname = f"{_LEVEL_COLORS[record.levelno]}{levelname}{_RESET}"
        try:
            return super().format(record)
        finally:
            record.levelname = levelname


def setup_logging(level: str | int | None = None, use_color: bool | None = None) -> None:
    """
    Configure root logging for PageDigest.

    Args:
        level: Logging level name or number. Defaults to config.LOG_LEVEL.
        use_color: Force colored output on/off. Defaults to whether stdout is a TTY.
    """
    from pagedigest.config import LOG_LEVEL

    if level is None:
        level = LOG_LEVEL
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)
    if use_color is None:
        use_color = sys.stdout.isatty()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(OTelColorFormatter(use_color=use_color))

    root = logging.getLogger()
    for existing in list(root.handlers):
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(level)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


__all__ = ["OTelColorFormatter", "setup_logging"]
