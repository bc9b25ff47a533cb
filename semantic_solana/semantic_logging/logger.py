"""
structlog setup for Semantic Solana.

Every record carries a UTC timestamp, level, logger name, service and event_type.
Events are snake_case names with keyword context, e.g.

    logger.info("helius_fetch_ok", wallet_id=address, count=len(items))

LOG_FORMAT=json (default) renders one JSON object per line; any other value
renders coloured console output. LOG_LEVEL sets the minimum level.

This module imports nothing else from semantic_solana so any module can log.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Any

import structlog

SERVICE_NAME = "semantic-solana"

# Context keys that hold full base58 addresses; console output shortens them.
_ADDRESS_KEYS = ("wallet_id", "address", "from_address", "to_address")


def _level_from_env() -> int:
    name = (os.getenv("LOG_LEVEL") or "INFO").strip().upper()
    return getattr(logging, name, logging.INFO)


def _format_from_env() -> str:
    return (os.getenv("LOG_FORMAT") or "json").strip().lower()


def _rename_event(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """structlog's 'event' becomes event_type, the key the log pipeline groups on."""
    if "event" in event_dict and "event_type" not in event_dict:
        event_dict["event_type"] = event_dict.pop("event")
    event_dict.setdefault("service", SERVICE_NAME)
    return event_dict


def _shorten_addresses(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    for key in _ADDRESS_KEYS:
        value = event_dict.get(key)
        if isinstance(value, str) and len(value) > 12:
            event_dict[key] = f"{value[:4]}...{value[-4:]}"
    return event_dict


def configure_logging(level: int | None = None, fmt: str | None = None) -> None:
    """(Re)configure structlog. Called once at import; main may call it again after loading .env."""
    fmt = fmt or _format_from_env()
    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True, key="timestamp"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]
    if fmt == "json":
        processors += [_rename_event, structlog.processors.JSONRenderer()]
    else:
        processors += [_shorten_addresses, structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())]
    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level if level is not None else _level_from_env()),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
        cache_logger_on_first_use=False,
    )


if not structlog.is_configured():
    configure_logging()


def get_logger(name: str) -> structlog.BoundLogger:
    """Logger for a module; pass __name__."""
    return structlog.get_logger(name).bind(logger=name)


def bind_wallet(wallet_id: str) -> structlog.BoundLogger:
    """Request-scoped logger: wallet_id is attached to every event it emits."""
    return get_logger("semantic_solana.wallet").bind(wallet_id=wallet_id)
