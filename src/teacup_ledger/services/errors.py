# src/teacup_ledger/services/errors.py
"""Typed failures raised by ledger operations.

Every failure is raised before any state is changed, so callers can rely on
an exception meaning "nothing happened".
"""

from __future__ import annotations

from fastapi import status


class LedgerError(RuntimeError):
    """Base exception for rejected ledger operations."""

    kind = "LedgerError"
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.__doc__ or self.kind)
        self.message = str(self.args[0])


class InvalidContent(LedgerError):
    """Content reference is empty or has an unsupported shape."""

    kind = "InvalidContent"
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY


class InvalidCategory(LedgerError):
    """Category is outside the supported enumeration."""

    kind = "InvalidCategory"
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY


class NotFound(LedgerError):
    """Referenced conversation, post or token does not exist."""

    kind = "NotFound"
    status_code = status.HTTP_404_NOT_FOUND


class Forbidden(LedgerError):
    """Caller lacks ownership or admin rights for this mutation."""

    kind = "Forbidden"
    status_code = status.HTTP_403_FORBIDDEN


class AlreadyShared(LedgerError):
    """Conversation has already been shared to the community."""

    kind = "AlreadyShared"
    status_code = status.HTTP_409_CONFLICT


class AlreadyLiked(LedgerError):
    """Caller already liked this subject."""

    kind = "AlreadyLiked"
    status_code = status.HTTP_409_CONFLICT


class NotLiked(LedgerError):
    """Caller has not liked this subject."""

    kind = "NotLiked"
    status_code = status.HTTP_409_CONFLICT


class TooEarly(LedgerError):
    """Reward distribution requested before the interval elapsed."""

    kind = "TooEarly"
    status_code = status.HTTP_409_CONFLICT


__all__ = [
    "LedgerError",
    "InvalidContent",
    "InvalidCategory",
    "NotFound",
    "Forbidden",
    "AlreadyShared",
    "AlreadyLiked",
    "NotLiked",
    "TooEarly",
]
