# src/teacup_ledger/schemas/post.py
"""Post-related Pydantic schemas."""

from pydantic import BaseModel, ConfigDict, Field


class PostCreate(BaseModel):
    """Schema for creating a new community post."""

    content_ref: str = Field(..., description="Content identifier (CIDv0 or CIDv1)")
    category: int = Field(..., description="Post category (0-4)")


class PostResponse(BaseModel):
    """Schema for post information returned by the API."""

    id: int
    owner: str
    content_ref: str
    category: int
    created_at: int
    like_count: int
    source_conversation_id: int | None = None
    is_reward_winner: bool
    reward_token_id: int | None = None

    model_config = ConfigDict(from_attributes=True)


class LikeResponse(BaseModel):
    """Like count after a like or unlike."""

    id: int
    like_count: int
    liked: bool


class LikeStatus(BaseModel):
    """Whether an account currently likes a subject."""

    id: int
    account: str
    liked: bool
