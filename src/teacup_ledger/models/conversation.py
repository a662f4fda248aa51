# src/teacup_ledger/models/conversation.py
"""SQLAlchemy model for logged AI conversations."""

from sqlalchemy import BigInteger, Boolean, Index, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from teacup_ledger.db.session import Base


class Conversation(Base):
    """A conversation with the AI persona, stored off-ledger by content reference.

    Conversations can be liked and promoted once into a community post.
    """

    __tablename__ = "conversation"
    __table_args__ = (Index("ix_conversation_owner", "owner"),)

    # Assigned from LedgerState.next_conversation_id, never reused.
    id: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=False)
    owner: Mapped[str] = mapped_column(Text, nullable=False)
    content_ref: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[int] = mapped_column(BigInteger, nullable=False)

    # Flips false -> true exactly once, when shared to the community.
    is_shared: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    like_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    is_reward_winner: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    reward_token_id: Mapped[int | None] = mapped_column(BigInteger, nullable=True)
