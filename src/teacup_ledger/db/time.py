# src/teacup_ledger/db/time.py
"""Time utilities for ledger timestamps."""

from datetime import UTC, datetime


def utcnow() -> datetime:
    """Return the current UTC time as a timezone-aware datetime."""
    return datetime.now(UTC)


def unix_now() -> int:
    """Return the current time as whole seconds since the epoch."""
    return int(utcnow().timestamp())
