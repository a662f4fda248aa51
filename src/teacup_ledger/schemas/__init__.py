# src/teacup_ledger/schemas/__init__.py
"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .conversation import ConversationCreate, ConversationResponse, ConversationShare
from .post import LikeResponse, LikeStatus, PostCreate, PostResponse
from .reward import (
    DistributionResponse,
    NextDistributionResponse,
    RewardTokenResponse,
    RewardWinnerResponse,
)
from .system import EventResponse, LedgerStats, MetadataUpdate, MetadataValue

__all__ = [
    "ConversationCreate", "ConversationResponse", "ConversationShare",
    "LikeResponse", "LikeStatus", "PostCreate", "PostResponse",
    "DistributionResponse", "NextDistributionResponse",
    "RewardTokenResponse", "RewardWinnerResponse",
    "EventResponse", "LedgerStats", "MetadataUpdate", "MetadataValue",
]
