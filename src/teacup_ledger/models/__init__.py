# src/teacup_ledger/models/__init__.py
"""SQLAlchemy models for the TeaCup ledger."""

from .conversation import Conversation
from .ledger_state import LedgerState
from .like import ConversationLike, PostLike
from .post import Post, PostCategory
from .reward import RewardToken

__all__ = [
    "Conversation",
    "LedgerState",
    "ConversationLike", "PostLike",
    "Post", "PostCategory",
    "RewardToken",
]
