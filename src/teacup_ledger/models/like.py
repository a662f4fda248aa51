# src/teacup_ledger/models/like.py
"""Models capturing per-user likes on posts and conversations."""

from sqlalchemy import BigInteger, ColumnElement, ForeignKey, Text, and_
from sqlalchemy.orm import Mapped, mapped_column

from teacup_ledger.db.session import Base


class PostLike(Base):
    """Per-account like on a post."""

    __tablename__ = "post_like"

    post_id: Mapped[int] = mapped_column(
        BigInteger,
        ForeignKey("post.id", ondelete="CASCADE"),
        primary_key=True,
    )
    # Composite primary key prevents duplicate likes from the same account.
    liker: Mapped[str] = mapped_column(Text, primary_key=True)

    @classmethod
    def for_subject(cls, subject_id: int, liker: str) -> "PostLike":
        return cls(post_id=subject_id, liker=liker)

    @classmethod
    def matching(cls, subject_id: int, liker: str) -> ColumnElement[bool]:
        return and_(cls.post_id == subject_id, cls.liker == liker)


class ConversationLike(Base):
    """Per-account like on a conversation."""

    __tablename__ = "conversation_like"

    conversation_id: Mapped[int] = mapped_column(
        BigInteger,
        ForeignKey("conversation.id", ondelete="CASCADE"),
        primary_key=True,
    )
    liker: Mapped[str] = mapped_column(Text, primary_key=True)

    @classmethod
    def for_subject(cls, subject_id: int, liker: str) -> "ConversationLike":
        return cls(conversation_id=subject_id, liker=liker)

    @classmethod
    def matching(cls, subject_id: int, liker: str) -> ColumnElement[bool]:
        return and_(cls.conversation_id == subject_id, cls.liker == liker)
