# src/teacup_ledger/services/__init__.py
"""Business logic services for the TeaCup ledger."""

from .errors import (
    AlreadyLiked,
    AlreadyShared,
    Forbidden,
    InvalidCategory,
    InvalidContent,
    LedgerError,
    NotFound,
    NotLiked,
    TooEarly,
)
from .events import EventDispatcher, EventLog, LedgerEvent
from .ledger import DistributionResult, LedgerService, RewardWinner

__all__ = [
    "LedgerService",
    "DistributionResult",
    "RewardWinner",
    "EventDispatcher",
    "EventLog",
    "LedgerEvent",
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
