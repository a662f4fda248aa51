# src/teacup_ledger/models/post.py
"""SQLAlchemy models for community posts and their categories."""

from enum import IntEnum

from sqlalchemy import BigInteger, Boolean, ForeignKey, Index, Integer, SmallInteger, Text
from sqlalchemy.orm import Mapped, mapped_column

from teacup_ledger.db.session import Base


class PostCategory(IntEnum):
    """Closed set of community categories shared with clients."""

    TEA_CULTURE = 0
    BREWING = 1
    HEALTH = 2
    FUNNY = 3
    GENERAL = 4


class Post(Base):
    """Community post referencing externally stored content.

    Posts compete on likes for the periodic reward distribution.
    """

    __tablename__ = "post"
    __table_args__ = (
        Index("ix_post_owner", "owner"),
        Index("ix_post_ranking", "like_count", "id"),
    )

    # Own sequence, independent of conversation ids.
    id: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=False)
    owner: Mapped[str] = mapped_column(Text, nullable=False)
    content_ref: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[int] = mapped_column(SmallInteger, nullable=False)
    created_at: Mapped[int] = mapped_column(BigInteger, nullable=False)
    like_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    # Set when the post was promoted from a conversation.
    source_conversation_id: Mapped[int | None] = mapped_column(
        BigInteger,
        ForeignKey("conversation.id"),
        nullable=True,
    )

    is_reward_winner: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    # Most recently minted reward token; earlier ones live in reward_token.
    reward_token_id: Mapped[int | None] = mapped_column(BigInteger, nullable=True)
