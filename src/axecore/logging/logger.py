"""structlog setup for axecore.

Events go through structlog bound loggers rendered by the standard library
``logging`` module, so an application that configures logging itself keeps
its handlers and levels. Scan reports own stdout; log output goes to stderr
or a file.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Any, cast

import structlog

from ..config import get_settings

_configured = False


def _processors(structured: bool, timestamps: bool, colors: bool) -> list[Any]:
    chain: list[Any] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
    ]
    if timestamps:
        chain.append(structlog.processors.TimeStamper(fmt="iso", utc=True))
    chain += [
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]
    chain.append(
        structlog.processors.JSONRenderer()
        if structured
        else structlog.dev.ConsoleRenderer(colors=colors)
    )
    return chain


def _handlers(stderr: bool, log_file: Path | None) -> list[logging.Handler]:
    handlers: list[logging.Handler] = []
    if stderr:
        handlers.append(logging.StreamHandler(sys.stderr))
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))
    for handler in handlers:
        handler.setFormatter(logging.Formatter("%(message)s"))
    return handlers or [logging.NullHandler()]


def _configure_structlog(structured: bool, timestamps: bool, colors: bool) -> None:
    structlog.configure(
        processors=_processors(structured, timestamps, colors),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def setup_logging(
    level: str = "INFO",
    log_file: Path | None = None,
    structured: bool = False,
    console: bool = True,
    add_timestamp: bool = True,
    colorize: bool = True,
) -> None:
    """Configure structlog and replace the root logger's handlers.

    Args:
        level: Log level name, e.g. ``"DEBUG"``
        log_file: Also write log lines to this file
        structured: Render JSON lines instead of console output
        console: Write to stderr
        add_timestamp: Stamp events with an ISO timestamp
        colorize: Use colors in console output
    """
    global _configured

    _configure_structlog(structured, add_timestamp, colorize and console and not structured)
    logging.basicConfig(
        format="%(message)s",
        level=getattr(logging, level.upper()),
        handlers=_handlers(console, log_file),
        force=True,
    )
    _configured = True


def _configure_from_settings() -> None:
    global _configured

    if logging.getLogger().handlers:
        # The host application owns the root logger
        try:
            structured = get_settings().structured_logs
        except ValueError:
            structured = False
        _configure_structlog(structured, True, False)
        _configured = True
        return

    try:
        settings = get_settings()
        setup_logging(
            level=settings.log_level,
            log_file=settings.log_file,
            structured=settings.structured_logs,
        )
    except (AttributeError, OSError, ValueError):
        # Unknown level name or unwritable log file
        setup_logging()


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """
    Return a structlog logger, configuring logging from settings on first use.

    When the root logger already has handlers only structlog is configured,
    so events flow into the application's existing logging setup.
    """
    if not _configured:
        _configure_from_settings()
    return cast(structlog.stdlib.BoundLogger, structlog.get_logger(name))


class ScanLogger:
    """Emits the start, end and frame failure events of one scan."""

    def __init__(self, base_logger: structlog.stdlib.BoundLogger | None = None) -> None:
        self.logger = base_logger or get_logger(__name__)

    def log_scan_start(self, driver: str, mode: str, **kwargs: Any) -> dict[str, Any]:
        """
        Log that a scan started.

        Args:
            driver: ``"selenium"`` or ``"playwright"``
            mode: ``"run-partial"`` or ``"legacy"``
            **kwargs: Extra fields, e.g. the page url

        Returns:
            Context to hand back to ``log_scan_end``.
        """
        scan = {"driver": driver, "mode": mode, "start_time": datetime.now().isoformat()}
        scan.update(kwargs)
        self.logger.info("axe_scan_started", **scan)
        return scan

    def log_frame_failure(self, context: dict[str, Any], frame: str, error: Exception) -> None:
        self.logger.warning(
            "axe_frame_failed",
            driver=context.get("driver"),
            frame=frame,
            error=str(error),
            error_type=type(error).__name__,
        )

    def log_scan_end(
        self,
        context: dict[str, Any],
        success: bool,
        frames: int | None = None,
        violations: int | None = None,
        error: Exception | None = None,
    ) -> None:
        """Log the outcome of the scan started with ``context``."""
        finished = datetime.now()
        fields = dict(context)
        fields["end_time"] = finished.isoformat()
        fields["duration"] = (finished - datetime.fromisoformat(context["start_time"])).total_seconds()
        fields["success"] = success
        for key, value in (("frames", frames), ("violations", violations)):
            if value is not None:
                fields[key] = value
        if error is not None:
            fields["error"] = str(error)
            fields["error_type"] = type(error).__name__

        if success:
            self.logger.info("axe_scan_completed", **fields)
        else:
            self.logger.error("axe_scan_failed", **fields)
