"""Centralized logging utilities for tenantscope.

This module provides:
- Logging configuration from TenantScopeConfig
- Safe, bounded previews of values for log lines
- Structured logging with principal / scope context
"""

from __future__ import annotations

import json
import logging
from typing import Any, Optional

from .config import LogLevel, TenantScopeConfig
from .facade import ScopeContext

# Record attributes the formatter lifts to top-level fields
_SCOPE_FIELDS = ("principal_id", "customer_id", "tenant_id")

_RESERVED_ATTRS = frozenset(
    {
        "name", "msg", "args", "created", "filename", "funcName",
        "levelname", "levelno", "lineno", "module", "msecs",
        "message", "pathname", "process", "processName", "relativeCreated",
        "thread", "threadName", "exc_info", "exc_text", "stack_info",
        "taskName", *_SCOPE_FIELDS,
    }
)


def safe_preview(value: Any, limit: int = 240) -> str:
    """Create a single-line, length-bounded preview of a value for logging.

    Args:
        value: The value to preview (any type)
        limit: Maximum length of the preview (default: 240)

    Returns:
        A truncated string representation; ``""`` for None.
    """
    if value is None:
        return ""

    if isinstance(value, str):
        s = value
    elif isinstance(value, (dict, list, tuple)):
        try:
            s = json.dumps(value, default=str, ensure_ascii=False)
        except (TypeError, ValueError):
            s = str(value)
    else:
        s = str(value)

    s = " ".join(s.split())

    if len(s) > limit:
        return s[: limit - 1] + "…"

    return s


class ScopeFormatter(logging.Formatter):
    """Formatter that carries principal and scope identifiers.

    Emits JSON (one object per line) or plain text. In both modes the
    ``principal_id`` / ``customer_id`` / ``tenant_id`` record attributes
    are rendered when present.
    """

    def __init__(self, json_format: bool = True, *args: Any, **kwargs: Any):
        super().__init__(*args, **kwargs)
        self.json_format = json_format

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        scope = {
            key: str(getattr(record, key))
            for key in _SCOPE_FIELDS
            if getattr(record, key, None) is not None
        }
        log_data.update(scope)

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS:
                log_data[key] = safe_preview(value)

        if self.json_format:
            return json.dumps(log_data, default=str, ensure_ascii=False)

        parts = [
            f"[{log_data['timestamp']}]",
            log_data["level"],
            log_data["logger"],
        ]
        parts.extend(f"{key}={value}" for key, value in scope.items())
        parts.append(f": {log_data['message']}")
        return " ".join(parts)


class ScopeLoggerAdapter(logging.LoggerAdapter):
    """Logger adapter that adds principal and scope identifiers to records.

    Usage:
        logger = get_scope_logger(__name__)
        logger.info("Switched customer", context=scope_context)
        logger.info("Granted", principal_id="u-1", customer_id="A")
    """

    def __init__(
        self,
        logger: logging.Logger,
        principal_id: Optional[str] = None,
        customer_id: Optional[str] = None,
    ):
        super().__init__(logger, {})
        self.principal_id = principal_id
        self.customer_id = customer_id

    def process(self, msg: str, kwargs: dict[str, Any]) -> tuple[str, dict[str, Any]]:
        principal_id = kwargs.pop("principal_id", self.principal_id)
        customer_id = kwargs.pop("customer_id", self.customer_id)
        tenant_id = kwargs.pop("tenant_id", None)

        # A bound ScopeContext fills whatever was not given explicitly
        context = kwargs.pop("context", None)
        if isinstance(context, ScopeContext):
            if context.principal is not None:
                principal_id = principal_id or context.principal.id
            scope = context.scope
            customer_id = customer_id or scope.customer_id
            tenant_id = tenant_id or scope.tenant_id

        extra = dict(kwargs.get("extra") or {})
        if principal_id:
            extra["principal_id"] = principal_id
        if customer_id:
            extra["customer_id"] = customer_id
        if tenant_id:
            extra["tenant_id"] = tenant_id
        kwargs["extra"] = extra

        return msg, kwargs


def setup_logging(
    config: Optional[TenantScopeConfig] = None,
    json_format: Optional[bool] = None,
) -> None:
    """Configure the root logger for an application embedding tenantscope.

    Args:
        config: TenantScopeConfig instance (if None, loads from environment)
        json_format: Force JSON (True) or plain text (False); defaults to ``config.log_json``
    """
    if config is None:
        from .config import load_config_from_env

        config = load_config_from_env()

    level_map = {
        LogLevel.DEBUG: logging.DEBUG,
        LogLevel.INFO: logging.INFO,
        LogLevel.WARNING: logging.WARNING,
        LogLevel.ERROR: logging.ERROR,
        LogLevel.CRITICAL: logging.CRITICAL,
    }
    log_level = level_map.get(config.log_level, logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(log_level)
    console_handler.setFormatter(
        ScopeFormatter(json_format=config.log_json if json_format is None else json_format)
    )
    root_logger.addHandler(console_handler)


def get_scope_logger(
    name: str,
    principal_id: Optional[str] = None,
    customer_id: Optional[str] = None,
) -> ScopeLoggerAdapter:
    """Get a logger adapter that carries principal / scope identifiers.

    Args:
        name: Logger name (typically __name__)
        principal_id: Optional principal id to include in all logs
        customer_id: Optional customer id to include in all logs

    Returns:
        ScopeLoggerAdapter instance
    """
    return ScopeLoggerAdapter(logging.getLogger(name), principal_id=principal_id, customer_id=customer_id)


__all__ = [
    "ScopeFormatter",
    "ScopeLoggerAdapter",
    "get_scope_logger",
    "safe_preview",
    "setup_logging",
]
