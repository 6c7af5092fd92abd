# src/xcp/infrastructure/logging/logger.py
# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""Logging integration for detailed errors.

This module exposes an idempotent root configurator, a per-module logger
factory and two formatters that know how to show a :class:`DetailedError`
together with its cause chain.

Features:
    * JSON lines with stable keys: ``ts``, ``level``, ``logger``, ``message``.
    * Exception enrichment: ``exc_type``, ``exc_message`` and, for detailed
      errors, ``exc_code`` and the full chain rendering in ``exc_detail``.
    * A plain-text formatter for consoles that prints the chain rendering in
      place of the standard traceback.
    * No-throw enrichment path.

Typical usage:
    configure_root_logging()
    log = get_json_logger(__name__)
    try:
        ...
    except DetailedError:
        log.exception("operation failed")
"""

from __future__ import annotations

import json
import logging
from datetime import UTC, datetime
from types import TracebackType
from typing import Any

from xcp.config.settings import get_settings
from xcp.domain.exceptions.base import DetailedError
from xcp.domain.services.chain_renderer import ChainRenderer

__all__ = [
    "DetailedErrorFormatter",
    "configure_root_logging",
    "get_json_logger",
]

_ExcInfo = (
    tuple[type[BaseException], BaseException, TracebackType | None] | tuple[None, None, None]
)


def _chain_renderer() -> ChainRenderer:
    """Return a renderer bounded by the configured chain depth."""
    return ChainRenderer(max_depth=get_settings().max_chain_depth)


class _JsonFormatter(logging.Formatter):
    """JSON log formatter emitting stable keys and optional extras."""

    def format(self, record: logging.LogRecord) -> str:
        """Format a log record as a JSON object.

        Args:
            record: Logging record.

        Returns:
            JSON-encoded log line.
        """
        ts = datetime.now(tz=UTC).isoformat()
        payload: dict[str, Any] = {
            "ts": ts,
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        # Exceptions: guard against None in exc_info tuple.
        if record.exc_info:
            exc_type, exc_value, _ = record.exc_info
            if exc_type is not None:
                payload["exc_type"] = exc_type.__name__
            if exc_value is not None:
                payload["exc_message"] = str(exc_value)
            if isinstance(exc_value, DetailedError):
                try:
                    if exc_value.code is not None:
                        payload["exc_code"] = str(exc_value.code)
                    payload["exc_detail"] = _chain_renderer().render(exc_value)
                except Exception as exc:
                    payload["exc_detail_error"] = str(exc)

        # Extra dict, if any.
        extra = getattr(record, "extra", None)
        if isinstance(extra, dict):
            payload.update(extra)

        return json.dumps(payload, separators=(",", ":"), ensure_ascii=False, default=str)


class DetailedErrorFormatter(logging.Formatter):
    """Plain-text formatter that prints detailed errors with their cause chain.

    Records carrying a :class:`DetailedError` get its chain rendering in place
    of the standard traceback; any other exception is formatted as usual.
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format a record, rendering detailed errors even if exc_text is cached.

        Args:
            record: Logging record.

        Returns:
            The formatted text.
        """
        exc_value = record.exc_info[1] if record.exc_info else None
        if not isinstance(exc_value, DetailedError):
            return super().format(record)

        # Another handler's formatter may have cached a plain traceback.
        cached = record.exc_text
        record.exc_text = None
        try:
            return super().format(record)
        finally:
            record.exc_text = cached

    def formatException(self, ei: _ExcInfo) -> str:  # noqa: N802 - logging API name
        """Format exception info for a log record.

        Args:
            ei: The ``(type, value, traceback)`` triple of the record.

        Returns:
            The chain rendering for detailed errors, otherwise the standard
            traceback text. The standard text is also used when the chain
            cannot be rendered, e.g. under invalid configuration.
        """
        exc_value = ei[1]
        if isinstance(exc_value, DetailedError):
            try:
                return _chain_renderer().render(exc_value)
            except Exception:
                return super().formatException(ei)
        return super().formatException(ei)


def configure_root_logging(level: str | int | None = None, fmt: str | None = None) -> None:
    """Initialize the root logger with a single stream handler (idempotent).

    Args:
        level: Logging level or level name. If ``None``, use ``XCP_LOG_LEVEL``.
        fmt: ``"json"`` or ``"text"``. If ``None``, use ``XCP_LOG_FORMAT``.
    """
    root = logging.getLogger()

    resolved: int | str = level if level is not None else get_settings().log_level
    if isinstance(resolved, str):
        resolved = resolved.upper()
    root.setLevel(resolved)

    if root.handlers:
        # Already configured; prevent duplicate handlers.
        return

    handler = logging.StreamHandler()
    if (fmt or get_settings().log_format).lower() == "text":
        handler.setFormatter(
            DetailedErrorFormatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
    else:
        handler.setFormatter(_JsonFormatter())
    root.addHandler(handler)


def get_json_logger(name: str) -> logging.Logger:
    """Return a module-specific logger backed by the root handler.

    This does *not* implicitly configure the root logger. Call
    :func:`configure_root_logging` once at startup for global defaults.

    Args:
        name: Logger name, typically ``__name__`` of the caller.

    Returns:
        Configured logger.
    """
    logger = logging.getLogger(name)
    # Delegate formatting and level to the root logger.
    logger.propagate = True
    return logger
