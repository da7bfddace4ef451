"""Logging configuration for the AgentOps MCP server with optional Redis shipping."""

from __future__ import annotations

import json
import logging
import os
import sys
from datetime import UTC, datetime
from logging import LogRecord
from typing import TYPE_CHECKING

import redis

if TYPE_CHECKING:
    from typing import TextIO

LOG_RETENTION_SECONDS = 7 * 24 * 3600

_RESERVED_ATTRS = frozenset(
    {
        "name",
        "msg",
        "args",
        "created",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "module",
        "msecs",
        "message",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "thread",
        "threadName",
        "exc_info",
        "exc_text",
        "stack_info",
        "taskName",
    }
)


class RedisHandler(logging.Handler):
    """Logging handler that appends JSON entries to a daily Redis list."""

    def __init__(
        self,
        host: str,
        port: int = 6379,
        key_prefix: str = "agentops-logs",
        additional_fields: dict | None = None,
    ):
        """Initialize Redis handler.

        Args:
            host: Redis host
            port: Redis port (default: 6379)
            key_prefix: Prefix of the daily list keys
            additional_fields: Fields added to every log entry
        """
        super().__init__()

        self.client = redis.Redis(host=host, port=port, decode_responses=True)
        self.key_prefix = key_prefix
        self.additional_fields = additional_fields or {}

    def build_entry(self, record: LogRecord) -> dict:
        entry = {
            "@timestamp": datetime.now(UTC).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
            **self.additional_fields,
        }
        # extra= fields passed to the logging call
        entry.update({key: value for key, value in record.__dict__.items() if key not in _RESERVED_ATTRS})
        if record.exc_info:
            entry["exception"] = self.format(record)
        return entry

    def emit(self, record: LogRecord) -> None:
        """Emit a log record to Redis."""
        if record.name.startswith("redis"):
            return

        try:
            key = f"{self.key_prefix}:{datetime.now(UTC).strftime('%Y-%m-%d')}"
            self.client.rpush(key, json.dumps(self.build_entry(record), default=str))
            self.client.expire(key, LOG_RETENTION_SECONDS)
        except Exception:
            self.handleError(record)


def setup_logging(
    app_name: str = "agentops-mcp",
    log_level: str = "INFO",
    log_file: str | None = None,
    use_console: bool = True,
    console_stream: TextIO | None = None,
    redis_host: str | None = None,
    redis_port: int | None = None,
) -> logging.Logger:
    """Configure the root logger with console, file and optional Redis handlers.

    Args:
        app_name: Application name attached to Redis entries
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional file path for a file handler
        use_console: Whether to add a console handler
        console_stream: Stream of the console handler (default: stdout). The stdio MCP
            transport owns stdout, so the server passes stderr there.
        redis_host: Redis host (default: from REDIS_HOST env var)
        redis_port: Redis port (default: from REDIS_PORT env var, else 6379)

    Returns:
        Configured root logger
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))
    root_logger.handlers.clear()

    formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    if use_console:
        console = logging.StreamHandler(console_stream or sys.stdout)
        console.setFormatter(formatter)
        root_logger.addHandler(console)

    if log_file:
        file = logging.FileHandler(log_file)
        file.setFormatter(formatter)
        root_logger.addHandler(file)

    redis_host_val = redis_host or os.getenv("REDIS_HOST")
    redis_port_val = redis_port or int(os.getenv("REDIS_PORT", "6379"))

    if redis_host_val:
        try:
            redis_client = redis.Redis(host=redis_host_val, port=redis_port_val, socket_timeout=2)
            redis_client.ping()

            redis_handler = RedisHandler(
                host=redis_host_val,
                port=redis_port_val,
                additional_fields={"application": app_name, "environment": os.getenv("ENVIRONMENT", "develop")},
            )
            redis_handler.client = redis_client
            redis_handler.setLevel(logging.INFO)
            root_logger.addHandler(redis_handler)
            root_logger.info(f"Redis logging enabled: {redis_host_val}:{redis_port_val}")
        except Exception as e:
            root_logger.warning(f"Redis logging disabled: {e}")

    return root_logger
