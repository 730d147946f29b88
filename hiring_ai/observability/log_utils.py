"""
Logging utilities for safe structured logging.

Log context in this service routinely carries embedding vectors and raw
document bytes; both are reduced to a short summary before they reach a
handler.

Dependencies: logging (stdlib)
System role: Logging helper functions
"""

import logging
import math
from numbers import Real
from typing import Any


def _is_vector(value: list | tuple) -> bool:
    return bool(value) and all(
        isinstance(item, Real) and not isinstance(item, bool) for item in value
    )


def safe_log_value(value: Any, max_length: int = 500) -> str:
    """
    Safely convert any value to a string for logging.

    Numeric sequences are summarized by dimension and L2 norm, byte blobs
    by size, other sequences and dicts by length.

    Args:
        value: Value to convert
        max_length: Maximum length before truncating

    Returns:
        str: Safe string representation
    """
    try:
        if value is None:
            return "None"
        if isinstance(value, str):
            val_str = value
        elif isinstance(value, (bytes, bytearray)):
            val_str = f"bytes({len(value)})"
        elif isinstance(value, (list, tuple)) and _is_vector(value):
            norm = math.sqrt(sum(float(item) * float(item) for item in value))
            val_str = f"vector(dim={len(value)}, norm={norm:.3f})"
        elif isinstance(value, (list, tuple)):
            val_str = f"{type(value).__name__}({len(value)} items)"
        elif isinstance(value, dict):
            val_str = f"dict({len(value)} keys)"
        else:
            val_str = str(value)

        if len(val_str) > max_length:
            return val_str[:max_length] + f"... (truncated, {len(val_str)} total)"
        return val_str
    except Exception as e:
        return f"<unable to log: {type(e).__name__}>"


def log_with_context(
    logger: logging.Logger,
    level: int,
    message: str,
    **context,
) -> None:
    """
    Log a message with structured context, safely converting all values.

    Args:
        logger: Logger instance
        level: Log level (logging.INFO, etc.)
        message: Log message
        **context: Context dict with arbitrary key-value pairs
    """
    safe_context = {key: safe_log_value(val) for key, val in context.items()}
    logger.log(level, message, extra=safe_context)


def log_exception_with_context(
    logger: logging.Logger,
    message: str,
    exc: BaseException,
    **context,
) -> None:
    """
    Log an exception with its traceback and context.

    Domain errors also contribute their error category, so failed jobs can
    be told apart from retried ones in the logs.

    Args:
        logger: Logger instance
        message: Log message
        exc: Exception instance
        **context: Additional context dict
    """
    safe_context = {key: safe_log_value(val) for key, val in context.items()}
    safe_context["error_type"] = type(exc).__name__
    safe_context["error_msg"] = safe_log_value(str(exc))
    category = getattr(exc, "category", None)
    if category is not None:
        safe_context["error_category"] = getattr(category, "value", str(category))
    logger.error(message, exc_info=exc, extra=safe_context)
