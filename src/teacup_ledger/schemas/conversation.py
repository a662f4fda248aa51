# src/teacup_ledger/schemas/conversation.py
"""Conversation-related Pydantic schemas."""

from pydantic import BaseModel, ConfigDict, Field


class ConversationCreate(BaseModel):
    """Schema for logging a conversation already stored off-ledger."""

    content_ref: str = Field(..., description="Content identifier (CIDv0 or CIDv1)")


class ConversationShare(BaseModel):
    """Schema for promoting a conversation to a community post."""

    category: int = Field(..., description="Post category (0-4)")


class ConversationResponse(BaseModel):
    """Schema for conversation information returned by the API."""

    id: int
    owner: str
    content_ref: str
    created_at: int
    is_shared: bool
    like_count: int
    is_reward_winner: bool
    reward_token_id: int | None = None

    model_config = ConfigDict(from_attributes=True)
