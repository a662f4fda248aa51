# src/teacup_ledger/models/reward.py
"""Reward tokens minted by the distribution cycle."""

from sqlalchemy import BigInteger, ForeignKey, Index, Text
from sqlalchemy.orm import Mapped, mapped_column

from teacup_ledger.db.session import Base


class RewardToken(Base):
    """One minted reward, owned by the author of the winning post."""

    __tablename__ = "reward_token"
    __table_args__ = (Index("ix_reward_token_post_id", "post_id"),)

    token_id: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=False)
    post_id: Mapped[int] = mapped_column(BigInteger, ForeignKey("post.id"), nullable=False)
    owner: Mapped[str] = mapped_column(Text, nullable=False)
    minted_at: Mapped[int] = mapped_column(BigInteger, nullable=False)
