"""
Pescope Structured Logger
==========================

Provides :class:`PescopeLogger`, a logging facade that emits colour-coded
Rich output on stderr and, optionally, plain or JSON-lines records to a
rotating log file.

Stdout is reserved for reports, so the console handler always writes to
stderr.

References:
    - Python logging HOWTO. https://docs.python.org/3/howto/logging.html
    - Rich library. https://github.com/Textualize/rich
"""

from __future__ import annotations

import json
import logging
import time
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme

_LOG_THEME = Theme(
    {
        "log.level.debug": "dim cyan",
        "log.level.info": "bold bright_blue",
        "log.level.warning": "bold yellow",
        "log.level.error": "bold red",
        "log.level.critical": "bold white on red",
    }
)


# ========================== JSON Formatter =================================


class _JSONFormatter(logging.Formatter):
    """Emit each log record as a single-line JSON object.

    Output fields::

        {
          "timestamp": "...",
          "level": "INFO",
          "logger": "pescope.engine",
          "message": "...",
          "tool_name": "engine",
          "operation": "parse",
          "extra": { ... },
          "exc_info": "..."
        }
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for attr in ("tool_name", "operation"):
            val = getattr(record, attr, None)
            if val is not None:
                entry[attr] = val

        extra = getattr(record, "pescope_extra", None)
        if extra is not None:
            entry["extra"] = extra

        if record.exc_info and record.exc_info[1] is not None:
            entry["exc_info"] = self.formatException(record.exc_info)

        return json.dumps(entry, ensure_ascii=False, default=str)


# ========================== Rich Console Handler ===========================


class _ColorConsoleHandler(RichHandler):
    """:class:`rich.logging.RichHandler` bound to stderr with the pescope
    theme."""

    def __init__(self, **kwargs: Any) -> None:
        console = Console(theme=_LOG_THEME, stderr=True)
        super().__init__(
            console=console,
            show_path=False,
            show_time=True,
            rich_tracebacks=True,
            tracebacks_show_locals=False,
            markup=False,
            **kwargs,
        )


# ========================== PescopeLogger ==================================


class PescopeLogger:
    """Structured, context-aware logger for pescope components.

    Each instance is bound to a *tool_name* (e.g. ``"engine"``) and can
    carry a temporary *operation* context via a context manager.

    Usage::

        log = PescopeLogger("engine", log_level="DEBUG")
        with log.operation("parse"):
            log.debug("Reading %d bytes", len(data))

    Args:
        tool_name:       Identifying name for the component.
        log_level:       Minimum severity (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_file:        Path to the rotating log file. ``None`` or ``""``
                         disables file logging.
        json_logs:       If ``True`` the file handler emits JSON lines.
        max_bytes:       Maximum log-file size before rotation (default 10 MiB).
        backup_count:    Number of rotated backup files to keep.
        console_output:  If ``True`` attach a colour Rich console handler.
    """

    def __init__(
        self,
        tool_name: str,
        *,
        log_level: str = "WARNING",
        log_file: str | Path | None = None,
        json_logs: bool = False,
        max_bytes: int = 10_485_760,
        backup_count: int = 5,
        console_output: bool = True,
    ) -> None:
        self._tool_name = tool_name
        self._operation: str | None = None
        level = getattr(logging, log_level.upper(), logging.WARNING)

        self._logger = logging.getLogger(f"pescope.{tool_name}")
        self._logger.setLevel(level)
        self._logger.propagate = False

        # Prevent duplicate handlers on re-instantiation
        for handler in list(self._logger.handlers):
            self._logger.removeHandler(handler)
            handler.close()

        if console_output:
            self._logger.addHandler(_ColorConsoleHandler(level=level))

        if log_file:
            file_path = Path(log_file)
            file_path.parent.mkdir(parents=True, exist_ok=True)
            fh = RotatingFileHandler(
                filename=str(file_path),
                maxBytes=max_bytes,
                backupCount=backup_count,
                encoding="utf-8",
            )
            fh.setLevel(level)
            if json_logs:
                fh.setFormatter(_JSONFormatter())
            else:
                fh.setFormatter(
                    logging.Formatter(
                        fmt=(
                            "%(asctime)s | %(levelname)-8s | "
                            "%(name)s | %(message)s"
                        ),
                        datefmt="%Y-%m-%dT%H:%M:%S%z",
                    )
                )
            self._logger.addHandler(fh)

    @classmethod
    def from_config(cls, tool_name: str, settings: Any, *, verbose: bool = False) -> PescopeLogger:
        """Build a logger from a :class:`shared.config.GlobalConfig`.

        ``verbose`` forces DEBUG regardless of the configured level.
        """
        return cls(
            tool_name,
            log_level="DEBUG" if verbose else settings.log_level,
            log_file=settings.log_file or None,
            json_logs=settings.log_json,
        )

    # ------------------------------------------------------------------ #
    #  Context management -- operation scope
    # ------------------------------------------------------------------ #

    class _OperationContext:
        """Context manager that temporarily binds an operation name."""

        def __init__(self, parent: PescopeLogger, operation: str) -> None:
            self._parent = parent
            self._operation = operation
            self._prev: str | None = None

        def __enter__(self) -> PescopeLogger:
            self._prev = self._parent._operation
            self._parent._operation = self._operation
            return self._parent

        def __exit__(self, *exc: Any) -> None:
            self._parent._operation = self._prev

    def operation(self, name: str) -> _OperationContext:
        """Return a context manager that sets the *operation* field.

        While active, every log record carries ``operation=<name>``.
        """
        return self._OperationContext(self, name)

    # ------------------------------------------------------------------ #
    #  Log methods
    # ------------------------------------------------------------------ #

    def _enrich(self, kwargs: dict[str, Any]) -> dict[str, Any]:
        """Inject pescope context into the log record via *extra*."""
        extra = kwargs.pop("extra", {}) or {}

        extra_data: dict[str, Any] = {}
        standard_keys = {"exc_info", "stack_info", "stacklevel"}
        for key in list(kwargs):
            if key not in standard_keys:
                extra_data[key] = kwargs.pop(key)

        extra["tool_name"] = self._tool_name
        extra["operation"] = self._operation
        if extra_data:
            extra["pescope_extra"] = extra_data

        kwargs["extra"] = extra
        return kwargs

    def debug(self, msg: str, *args: Any, **kwargs: Any) -> None:
        """Log a DEBUG-level message."""
        self._logger.debug(msg, *args, **self._enrich(kwargs))

    def info(self, msg: str, *args: Any, **kwargs: Any) -> None:
        """Log an INFO-level message."""
        self._logger.info(msg, *args, **self._enrich(kwargs))

    def warning(self, msg: str, *args: Any, **kwargs: Any) -> None:
        """Log a WARNING-level message."""
        self._logger.warning(msg, *args, **self._enrich(kwargs))

    def error(self, msg: str, *args: Any, **kwargs: Any) -> None:
        """Log an ERROR-level message."""
        self._logger.error(msg, *args, **self._enrich(kwargs))

    # ------------------------------------------------------------------ #
    #  Timing helper
    # ------------------------------------------------------------------ #

    class _TimingContext:
        """Context manager for measuring and logging elapsed time."""

        def __init__(self, logger_inst: PescopeLogger, label: str) -> None:
            self._logger = logger_inst
            self._label = label
            self._start: float = 0.0

        def __enter__(self) -> PescopeLogger._TimingContext:
            self._start = time.perf_counter()
            self._logger.debug("Started: %s", self._label)
            return self

        def __exit__(self, exc_type: Any, *exc: Any) -> None:
            if exc_type is not None:
                return
            self._logger.debug(
                "Completed: %s (%.3f sec)", self._label, self.elapsed
            )

        @property
        def elapsed(self) -> float:
            """Seconds elapsed since entering the context."""
            return time.perf_counter() - self._start

    def timed(self, label: str) -> _TimingContext:
        """Context manager that logs start / finish and elapsed time."""
        return self._TimingContext(self, label)

    # ------------------------------------------------------------------ #
    #  Properties
    # ------------------------------------------------------------------ #

    @property
    def tool_name(self) -> str:
        """Name of the component this logger is bound to."""
        return self._tool_name

    @property
    def underlying(self) -> logging.Logger:
        """Direct access to the stdlib :class:`logging.Logger`."""
        return self._logger
