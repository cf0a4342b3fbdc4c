"""Structured logging for catalog queries.

A LogFormatter decides how a record is rendered (structlog pipeline or
plain stdlib JSON); a LogDestination decides where it goes (stderr or a
JSONL file). setup_logging() pairs one of each on the root logger.

Query modules log one event per operation with keyword fields:

    get_logger(__name__).info("graph.assembled", nodes=12, latency_ms=3.1)

Fields bound with bind_query_context() (e.g. the CLI command name) are
added to every event until clear_query_context().

Extension:
    register_formatter("name", cls) / register_destination("name", cls),
    then select with COMPGRAPH_LOG_FORMATTER / COMPGRAPH_LOG_DESTINATION.
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

import structlog

if TYPE_CHECKING:
    from compgraph.observability.config import ObservabilityConfig

_MANAGED_ATTR = "_compgraph_managed"
_FIELDS_ATTR = "compgraph_fields"


@runtime_checkable
class LogFormatter(Protocol):
    def setup(self, config: ObservabilityConfig) -> logging.Formatter: ...

    def get_logger(self, name: str, **kwargs: Any) -> Any: ...


@runtime_checkable
class LogDestination(Protocol):
    def create_handler(self, formatter: logging.Formatter) -> logging.Handler: ...

    def shutdown(self) -> None: ...


# ---------------------------------------------------------------------------
# Query context
# ---------------------------------------------------------------------------


def bind_query_context(**fields: Any) -> None:
    """Attach fields to every subsequent event in this context."""
    structlog.contextvars.bind_contextvars(**fields)


def clear_query_context() -> None:
    structlog.contextvars.clear_contextvars()


# ---------------------------------------------------------------------------
# Formatters
# ---------------------------------------------------------------------------


class StructlogFormatter:
    """structlog processors rendered through a stdlib handler."""

    @staticmethod
    def _renderer(log_format: str) -> Any:
        if log_format == "console":
            return structlog.dev.ConsoleRenderer()
        return structlog.processors.JSONRenderer(sort_keys=True)

    def setup(self, config: ObservabilityConfig) -> logging.Formatter:
        pre_chain = [
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.format_exc_info,
        ]
        structlog.configure(
            processors=[
                structlog.stdlib.filter_by_level,
                structlog.stdlib.add_logger_name,
                *pre_chain,
                structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
            ],
            wrapper_class=structlog.stdlib.BoundLogger,
            logger_factory=structlog.stdlib.LoggerFactory(),
            context_class=dict,
            cache_logger_on_first_use=True,
        )
        return structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                self._renderer(config.log_format),
            ],
        )

    def get_logger(self, name: str, **kwargs: Any) -> Any:
        return structlog.get_logger(name, **kwargs)


class StdlibFormatter:
    """Plain logging records, one JSON object per line (or console text)."""

    def setup(self, config: ObservabilityConfig) -> logging.Formatter:
        if config.log_format == "console":
            return logging.Formatter(
                "%(asctime)s %(levelname)-8s %(name)s: %(message)s",
                datefmt="%Y-%m-%dT%H:%M:%S",
            )
        return _JsonLineFormatter()

    def get_logger(self, name: str, **kwargs: Any) -> Any:
        return _KeywordLogger(logging.getLogger(name), kwargs)


class _JsonLineFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname.lower(),
            "logger": record.name,
            "event": record.getMessage(),
            **structlog.contextvars.get_contextvars(),
            **getattr(record, _FIELDS_ATTR, {}),
        }
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


class _KeywordLogger:
    """stdlib logger accepting structlog's event-plus-keywords call shape."""

    def __init__(self, logger: logging.Logger, bound: dict[str, Any] | None = None) -> None:
        self._logger = logger
        self._bound = dict(bound or {})

    def bind(self, **kw: Any) -> _KeywordLogger:
        return _KeywordLogger(self._logger, {**self._bound, **kw})

    def _emit(self, level: int, event: str, exc_info: bool = False, **kw: Any) -> None:
        self._logger.log(
            level, event, exc_info=exc_info, extra={_FIELDS_ATTR: {**self._bound, **kw}}
        )

    def debug(self, event: str, **kw: Any) -> None:
        self._emit(logging.DEBUG, event, **kw)

    def info(self, event: str, **kw: Any) -> None:
        self._emit(logging.INFO, event, **kw)

    def warning(self, event: str, **kw: Any) -> None:
        self._emit(logging.WARNING, event, **kw)

    def error(self, event: str, **kw: Any) -> None:
        self._emit(logging.ERROR, event, **kw)

    def exception(self, event: str, **kw: Any) -> None:
        self._emit(logging.ERROR, event, exc_info=True, **kw)


# ---------------------------------------------------------------------------
# Destinations
# ---------------------------------------------------------------------------


class StderrDestination:
    def create_handler(self, formatter: logging.Formatter) -> logging.Handler:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(formatter)
        return handler

    def shutdown(self) -> None:
        return None


class JsonlFileDestination:
    """Append events to a JSONL file (COMPGRAPH_LOG_PATH)."""

    default_path = "compgraph.jsonl"

    def __init__(self, path: str | Path | None = None) -> None:
        self.path = Path(path or self.default_path)
        self._handlers: list[logging.Handler] = []

    @classmethod
    def from_config(cls, config: ObservabilityConfig) -> JsonlFileDestination:
        return cls(config.jsonl_path)

    def create_handler(self, formatter: logging.Formatter) -> logging.Handler:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(self.path, mode="a", encoding="utf-8")
        handler.setFormatter(formatter)
        self._handlers.append(handler)
        return handler

    def shutdown(self) -> None:
        while self._handlers:
            self._handlers.pop().close()


_FORMATTERS: dict[str, type] = {"structlog": StructlogFormatter, "stdlib": StdlibFormatter}
_DESTINATIONS: dict[str, type] = {"stderr": StderrDestination, "jsonl": JsonlFileDestination}


def register_formatter(name: str, cls: type) -> None:
    _FORMATTERS[name] = cls


def register_destination(name: str, cls: type) -> None:
    """Register a destination. A `from_config(config)` classmethod is used if present."""
    _DESTINATIONS[name] = cls


def _lookup(registry: dict[str, type], name: str, what: str) -> type:
    try:
        return registry[name]
    except KeyError:
        raise ValueError(
            f"Unknown log {what}: {name!r}. Available: {sorted(registry)}"
        ) from None


# ---------------------------------------------------------------------------
# Wiring
# ---------------------------------------------------------------------------

_active: tuple[LogFormatter, LogDestination] | None = None


def setup_logging(config: ObservabilityConfig) -> None:
    """Install formatter × destination on the root logger.

    Handlers installed by earlier calls are replaced; handlers added by
    anyone else (pytest caplog, host applications) are left alone.
    """
    global _active

    formatter_cls = _lookup(_FORMATTERS, config.log_formatter, "formatter")
    destination_cls = _lookup(_DESTINATIONS, config.log_destination, "destination")

    formatter = formatter_cls()
    if hasattr(destination_cls, "from_config"):
        destination = destination_cls.from_config(config)
    else:
        destination = destination_cls()

    handler = destination.create_handler(formatter.setup(config))
    setattr(handler, _MANAGED_ATTR, True)

    root = logging.getLogger()
    for old in [h for h in root.handlers if getattr(h, _MANAGED_ATTR, False)]:
        root.removeHandler(old)
    root.addHandler(handler)
    root.setLevel(logging.getLevelName(config.log_level.upper()))

    if _active is not None:
        _active[1].shutdown()
    _active = (formatter, destination)


def get_logger(name: str = "", **kwargs: Any) -> Any:
    """Logger from the active formatter; a keyword-capable stdlib logger before setup."""
    if _active is None:
        return _KeywordLogger(logging.getLogger(name), kwargs)
    return _active[0].get_logger(name, **kwargs)


def shutdown_logging() -> None:
    global _active
    if _active is not None:
        _active[1].shutdown()
    _active = None
