"""
Logging for the storefront service.

The root logger is set up once when this module is first imported, so every
module just does:

    from storefront.logging import get_logger
    logger = get_logger(__name__)

Anything that came from a request (session ids, user ids, search terms,
emails) goes through one of the ``*_for_logging`` helpers before it is
interpolated into a message.
"""

import logging
import os
import sys
from functools import cache

# Vercel prefixes each line with its own timestamp
VERCEL_FORMAT = "%(levelname)s - %(name)s - %(message)s"
LOCAL_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# One INFO line per outgoing HTTP call to Supabase / Upstash otherwise
_QUIET_LOGGERS = ("httpx", "httpcore", "hpack", "upstash_redis")

_MISSING = "N/A"
_ID_PREFIX = 8
_CONTROL_CHARS = str.maketrans({"\n": "\\n", "\r": "\\r", "\t": "\\t", "\x00": None})


def _configure() -> None:
    root = logging.getLogger()
    if root.handlers:
        return

    level = getattr(logging, os.environ.get("LOG_LEVEL", "INFO").upper(), logging.INFO)
    fmt = VERCEL_FORMAT if os.environ.get("VERCEL") == "1" else LOCAL_FORMAT

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(fmt))
    root.addHandler(handler)
    root.setLevel(level)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


_configure()


@cache
def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def _neutralize(value) -> str:
    """Escape characters that would let a value forge extra log lines (CWE-117)."""
    return str(value).translate(_CONTROL_CHARS)


def sanitize_id_for_logging(id_value: str | None) -> str:
    """First 8 characters of an id, the same prefix the members table shows."""
    if not id_value:
        return _MISSING
    return _neutralize(id_value)[:_ID_PREFIX]


def sanitize_string_for_logging(value: str | None, max_length: int = 50) -> str:
    """Free text from a request, cut to ``max_length`` with a trailing ``...``."""
    if not value:
        return _MISSING
    safe_value = _neutralize(value)
    if len(safe_value) <= max_length:
        return safe_value
    return safe_value[:max_length] + "..."


def mask_email_for_logging(email: str | None) -> str:
    """``jane.doe@shop.io`` -> ``ja***@shop.io``"""
    if not email:
        return _MISSING
    local, sep, domain = _neutralize(email).partition("@")
    if not sep:
        return sanitize_string_for_logging(local, max_length=8)
    return f"{local[:2]}***@{domain}"


__all__ = [
    "get_logger",
    "mask_email_for_logging",
    "sanitize_id_for_logging",
    "sanitize_string_for_logging",
]
