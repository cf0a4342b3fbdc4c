"""compgraph observability: structured logging for catalog queries.

Public API:
    setup_logging(cfg)           - Wire formatter × destination (call once at startup)
    get_logger(name)             - Get a structured logger
    bind_query_context(**kw)     - Add fields to every event in this context
    register_formatter(n, cls)   - Register custom LogFormatter
    register_destination(n, cls) - Register custom LogDestination
    timed()                      - Millisecond stopwatch for latency_ms fields
"""

from compgraph.observability.config import ObservabilityConfig
from compgraph.observability.logging import (
    LogDestination,
    LogFormatter,
    bind_query_context,
    clear_query_context,
    get_logger,
    register_destination,
    register_formatter,
    setup_logging,
    shutdown_logging,
)
from compgraph.observability.timing import Stopwatch, timed

__all__ = [
    "LogDestination",
    "LogFormatter",
    "ObservabilityConfig",
    "Stopwatch",
    "bind_query_context",
    "clear_query_context",
    "get_logger",
    "register_destination",
    "register_formatter",
    "setup_logging",
    "shutdown_logging",
    "timed",
]
